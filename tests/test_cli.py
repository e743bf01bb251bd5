from svgcad.services.svg_to_dxf import main

SVG = '<svg width="100" height="100"><circle cx="50" cy="50" r="10"/></svg>'


def test_converts_to_given_output(tmp_path, capsys):
    source = tmp_path / "drawing.svg"
    source.write_text(SVG)
    target = tmp_path / "out.dxf"

    assert main([str(source), str(target)]) == 0
    assert "CIRCLE" in target.read_text()
    assert "OK:" in capsys.readouterr().out


def test_default_output_name(tmp_path):
    source = tmp_path / "drawing.svg"
    source.write_text(SVG)
    assert main([str(source)]) == 0
    assert (tmp_path / "drawing.svg.dxf").exists()


def test_usage_and_missing_input(tmp_path, capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().out
    assert main([str(tmp_path / "absent.svg")]) == 1


def test_unparseable_input(tmp_path, capsys):
    source = tmp_path / "broken.svg"
    source.write_text("<svg")
    assert main([str(source)]) == 1
    assert "Conversion failed" in capsys.readouterr().out
    assert not (tmp_path / "broken.svg.dxf").exists()
