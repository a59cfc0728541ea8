from PIL import Image

from halfblock.cli import main


def test_no_file_prints_help(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out.startswith("usage: halfblock")
    assert "--grayscale" in out


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.png")]) == 1
    assert capsys.readouterr().out == "error: File does not exist.\n"


def test_undecodable_file(tmp_path, capsys):
    path = tmp_path / "bad.jpg"
    path.write_bytes(b"\x00\x01\x02garbage")
    assert main([str(path)]) == 1
    assert capsys.readouterr().out == "error: Could not read image.\n"


def test_renders_colour(write_image, capsys):
    path = write_image(Image.new("RGBA", (1, 1), (255, 0, 0, 255)))
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == "\033[38;2;255;0;0m▀\033[0m\n"


def test_renders_grayscale(write_image, capsys):
    path = write_image(Image.new("RGBA", (2, 3), (255, 0, 0, 255)))
    assert main(["-g", str(path)]) == 0
    assert capsys.readouterr().out == "██\n▀▀\n"
    assert main(["--grayscale", str(path)]) == 0
    assert "\033" not in capsys.readouterr().out
