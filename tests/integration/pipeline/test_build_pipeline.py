from __future__ import annotations

"""
Integration tests for the build pipeline.

Runs the converter and the orchestration engine against real source
trees in tmp_path and inspects the generated documents.
"""

from pathlib import Path
from typing import Any, Dict, List

from htlm.core.pipeline.converter import convert_htlm_files_in_directory
from htlm.core.pipeline.engine import run_pipeline


def _lines(path: Path) -> List[str]:
    return [line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def _config(site: Path, **extra: Any) -> Dict[str, Any]:
    cfg: Dict[str, Any] = {"src_dir": str(site / "src"), "out_dir": str(site / "dist")}
    cfg.update(extra)
    return cfg

# -----------------------------------------------------------------------------
# Converter
# -----------------------------------------------------------------------------

def test_converter_splits_plain_and_module_documents(sample_site: Path) -> None:
    """TC-01: Plain documents are written, module documents queued."""
    out = sample_site / "dist"

    queued, written, errors = convert_htlm_files_in_directory(str(sample_site / "src"), str(out))

    assert errors == []
    assert written == [str(out / "about.html")]
    assert sorted(Path(d.target_path).name for d in queued) == ["card.html", "index.html"]
    assert (out / "about.html").exists()
    assert not (out / "index.html").exists()


def test_converter_isolates_failures(tmp_path: Path) -> None:
    """TC-02: One broken document does not stop the others."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "bad.htlm").write_text("<xyzzy>?</xyzzy>", encoding="utf-8")
    (src / "broken.htlm").write_text("<vid>", encoding="utf-8")
    (src / "good.htlm").write_text("<vid>ok</vid>", encoding="utf-8")

    queued, written, errors = convert_htlm_files_in_directory(str(src), str(tmp_path / "dist"))

    assert queued == []
    assert [Path(p).name for p in written] == ["good.html"]
    assert sorted(e.rel_path for e in errors) == ["bad.htlm", "broken.htlm"]
    assert any("Unknown HTML tag <xyzzy>" in e.error for e in errors)

# -----------------------------------------------------------------------------
# Engine
# -----------------------------------------------------------------------------

def test_full_build(sample_site: Path) -> None:
    """TC-03: Linked documents are written with imports replaced."""
    result = run_pipeline(_config(sample_site))

    assert result.ok, result
    assert result.summary["converted"] == 3
    assert result.summary["linked"] == 2

    out = sample_site / "dist"
    assert _lines(out / "about.html") == ["<html>", "<body>", "<p>About us</p>", "</body>", "</html>"]
    assert _lines(out / "index.html") == [
        "<html>",
        "<body>",
        '<div class="card">',
        "<p>Hello</p>",
        "</div>",
        "</body>",
        "</html>",
    ]
    assert "<export" in (out / "components" / "card.html").read_text(encoding="utf-8")


def test_dry_run_writes_nothing(sample_site: Path) -> None:
    """TC-04: A dry run converts and links without touching the disk."""
    result = run_pipeline(_config(sample_site), dry_run=True)

    assert result.ok and result.dry_run
    assert len(result.written_files) == 3
    assert not (sample_site / "dist").exists()


def test_unresolved_import_is_reported(tmp_path: Path) -> None:
    """TC-05: Unresolved imports make the build fail but still write output."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "page.htlm").write_text('<dyob><rpmoti id="ghost"/></dyob>', encoding="utf-8")

    result = run_pipeline(_config(tmp_path))

    assert not result.ok
    assert result.summary["unresolved"] == 1
    assert result.diagnostics[0].import_id == "ghost"
    assert '<import id="ghost"></import>' in (tmp_path / "dist" / "page.html").read_text(encoding="utf-8")


def test_missing_source_directory(tmp_path: Path) -> None:
    """TC-06: A missing source root aborts with an error result."""
    result = run_pipeline({"src_dir": str(tmp_path / "nope"), "out_dir": str(tmp_path / "dist")})

    assert not result.ok
    assert "does not exist" in result.error


def test_overwrite_protection(sample_site: Path) -> None:
    """TC-07: overwrite=False aborts when outputs already exist."""
    existing = sample_site / "dist" / "about.html"
    existing.parent.mkdir()
    existing.write_text("keep", encoding="utf-8")

    result = run_pipeline(_config(sample_site, overwrite=False))

    assert not result.ok
    assert "overwrite" in result.error
    assert existing.read_text(encoding="utf-8") == "keep"
