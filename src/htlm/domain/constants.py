from __future__ import annotations

"""
Domain Constants.

Centralizes the reserved vocabulary of the HTLM dialect (text and attribute
keys, module tag names) and the file-mapping conventions shared by the
pipeline and the module resolver.
"""

# -----------------------------------------------------------------------------
# RESERVED TREE KEYS
# -----------------------------------------------------------------------------
TEXT_KEY = "#text"
ATTRIBUTE_PREFIX = "@_"

# -----------------------------------------------------------------------------
# MODULE TAGS (canonical names)
# -----------------------------------------------------------------------------
IMPORT_TAG = "import"
EXPORT_TAG = "export"
CHILDREN_TAG = "children"

ID_ATTRIBUTE = ATTRIBUTE_PREFIX + "id"
SRC_ATTRIBUTE = ATTRIBUTE_PREFIX + "src"

# -----------------------------------------------------------------------------
# FILE MAPPING
# -----------------------------------------------------------------------------
SOURCE_EXTENSION = ".htlm"
OUTPUT_EXTENSION = ".html"

CONFIG_FILE_NAME = "htlm.config.json"
DEFAULT_SRC_DIR = "."
DEFAULT_OUT_DIR = "./dist"
