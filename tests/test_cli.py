import orjson
from typer.testing import CliRunner

from renumber.cli import app

from .conftest import make_pdf

runner = CliRunner()


def test_run_writes_pdf_and_meta(tmp_path):
    src = tmp_path / "flyer.pdf"
    src.write_bytes(make_pdf([["Call 555-123-4567 today"]]))
    out = tmp_path / "flyer.out.pdf"

    result = runner.invoke(
        app,
        ["run", "-i", str(src), "-o", str(out), "-n", "555-000-1111", "--offline"],
    )
    assert result.exit_code == 0, result.output
    assert out.exists()
    meta = orjson.loads((tmp_path / "flyer.out.meta.json").read_bytes())
    assert meta["result"]["replacements"] == 1


def test_run_reports_failures(tmp_path):
    result = runner.invoke(
        app,
        [
            "run",
            "-i",
            str(tmp_path / "missing.pdf"),
            "-o",
            str(tmp_path / "out.pdf"),
            "-n",
            "555-000-1111",
            "--offline",
        ],
    )
    assert result.exit_code == 1
    assert "Failed" in result.output


def test_batch_exit_code_tracks_failures(tmp_path):
    good = tmp_path / "good.pdf"
    good.write_bytes(make_pdf([["Call 555-123-4567"]]))
    bad = tmp_path / "bad.pdf"
    bad.write_bytes(b"garbage")

    result = runner.invoke(
        app,
        [
            "batch",
            str(good),
            str(bad),
            "--output-dir",
            str(tmp_path / "out"),
            "-n",
            "555-000-1111",
            "--offline",
        ],
    )
    assert result.exit_code == 1
    assert (tmp_path / "out" / "good.renumbered.pdf").exists()
