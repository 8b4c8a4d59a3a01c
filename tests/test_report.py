"""Tests for the standalone HTML report."""

from grounding_engine.analysis.design_check import evaluate_grid_design
from grounding_engine.analysis.grid_sizing import resistance_curve
from grounding_engine.report.html_report import generate_html_report


def test_report_page(tmp_path, reference_config):
    design = evaluate_grid_design(reference_config)
    curve = resistance_curve(reference_config, max_side_m=300.0)

    path = generate_html_report(
        out_dir=str(tmp_path),
        report_name="Yard <A> & B",
        inputs_block={"Grid (W x L)": "70.0 m x 70.0 m"},
        design=design,
        curve=curve,
    )

    page = (tmp_path / "report.html").read_text(encoding="utf-8")
    assert path == str(tmp_path / "report.html")
    assert "<title>Yard &lt;A&gt; &amp; B</title>" in page
    assert '<span class="badge warn">MEDIUM</span>' in page
    assert '<span class="badge bad">FAIL</span>' in page
    assert "208 m (target 2.78 ohm)" in page
    assert 'src="resistance_vs_side.png"' in page
    assert (tmp_path / "resistance_vs_side.png").exists()


def test_report_without_curve(tmp_path, reference_config):
    design = evaluate_grid_design(reference_config)
    generate_html_report(out_dir=str(tmp_path), report_name="r", inputs_block={}, design=design)

    assert "<img" not in (tmp_path / "report.html").read_text(encoding="utf-8")
    assert not (tmp_path / "resistance_vs_side.png").exists()
