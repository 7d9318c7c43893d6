from renumber import batch as batch_module
from renumber.batch import output_path_for, output_paths, run_batch
from renumber.pipeline import RunConfig

from .conftest import make_pdf


def test_batch_results_follow_input_order(tmp_path):
    good = tmp_path / "good.pdf"
    good.write_bytes(make_pdf([["Call 555-123-4567"]]))
    other = tmp_path / "other.pdf"
    other.write_bytes(make_pdf([["Nothing to see"]]))
    broken = tmp_path / "broken.pdf"
    broken.write_bytes(b"not a pdf at all")
    missing = tmp_path / "missing.pdf"

    inputs = [str(good), str(missing), str(broken), str(other)]
    out_dir = tmp_path / "out"
    results = run_batch(inputs, str(out_dir), "555-000-1111", RunConfig(font_url=None))

    assert [r.input for r in results] == inputs
    assert [r.ok for r in results] == [True, False, False, True]
    assert results[0].replacements == 1
    assert results[3].replacements == 0
    assert results[1].error and results[2].error
    assert (out_dir / "good.renumbered.pdf").exists()
    assert not (out_dir / "broken.renumbered.pdf").exists()


def test_output_name_for_urls(tmp_path):
    path = output_path_for("https://example.com/docs/flyer.pdf", str(tmp_path))
    assert path == tmp_path / "flyer.renumbered.pdf"


def test_same_base_name_from_different_folders_gets_distinct_outputs(tmp_path):
    first = tmp_path / "a" / "flyer.pdf"
    second = tmp_path / "b" / "flyer.pdf"
    first.parent.mkdir()
    second.parent.mkdir()
    first.write_bytes(make_pdf([["Call 555-123-4567"]]))
    second.write_bytes(make_pdf([["Call 555-222-3333 or 555-444-5555"]]))

    out_dir = tmp_path / "out"
    results = run_batch(
        [str(first), str(second)], str(out_dir), "555-000-1111", RunConfig(font_url=None)
    )

    assert all(r.ok for r in results)
    assert results[0].output_path != results[1].output_path
    assert results[0].output_path == str(out_dir / "flyer.renumbered.pdf")
    assert results[1].output_path == str(out_dir / "flyer-2.renumbered.pdf")
    assert [r.replacements for r in results] == [1, 2]
    assert sorted(p.name for p in out_dir.iterdir()) == [
        "flyer-2.renumbered.pdf",
        "flyer.renumbered.pdf",
    ]


def test_output_paths_skip_names_already_taken(tmp_path):
    paths = output_paths(["x/flyer.pdf", "flyer-2.pdf", "y/flyer.pdf"], str(tmp_path))
    assert [p.name for p in paths] == [
        "flyer.renumbered.pdf",
        "flyer-2.renumbered.pdf",
        "flyer-3.renumbered.pdf",
    ]


def test_unexpected_error_is_reported_and_batch_continues(tmp_path, monkeypatch):
    good = tmp_path / "good.pdf"
    good.write_bytes(make_pdf([["Call 555-123-4567"]]))
    bad = tmp_path / "bad.pdf"
    bad.write_bytes(make_pdf([["Call 555-123-4567"]]))

    real = batch_module.process_path

    def flaky(inp, *args, **kwargs):
        if inp == str(bad):
            raise RuntimeError("renderer exploded")
        return real(inp, *args, **kwargs)

    monkeypatch.setattr(batch_module, "process_path", flaky)
    results = run_batch(
        [str(bad), str(good)], str(tmp_path / "out"), "555-000-1111", RunConfig(font_url=None)
    )

    assert [r.ok for r in results] == [False, True]
    assert "renderer exploded" in results[0].error
    assert results[1].replacements == 1


def test_worker_pool_keeps_every_result(tmp_path):
    good = tmp_path / "good.pdf"
    good.write_bytes(make_pdf([["Call 555-123-4567"]]))
    broken = tmp_path / "broken.pdf"
    broken.write_bytes(b"not a pdf at all")

    inputs = [str(broken), str(good)]
    results = run_batch(
        inputs, str(tmp_path / "out"), "555-000-1111", RunConfig(font_url=None), workers=2
    )

    assert [r.input for r in results] == inputs
    assert [r.ok for r in results] == [False, True]
