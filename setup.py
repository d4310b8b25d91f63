# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="htlm",
    version="0.1.0",
    description="Convierte documentos HTLM (etiquetas desordenadas) en HTML con soporte de import/export",
    author="HTLM Maintainers",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["htlm*"]),
    python_requires=">=3.9",
    install_requires=[
        "lxml",  # Parseo y serializacion de marcado
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'htlm=htlm.main:main',  # Permite ejecutar la conversion via CLI
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
