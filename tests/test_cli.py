"""Tests for the command line entry point."""

import numpy as np
import pytest
from skimage import io

from laplacian_pyramid.cli import build_parser, load_image, main
from laplacian_pyramid.config import CONFIG_ENV


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user and working-directory config files out of the tests."""
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def gray_png(tmp_path):
    y, x = np.mgrid[0:64, 0:64]
    img = (127 + 100 * np.sin(x / 6.0) * np.cos(y / 9.0)).astype(np.uint8)
    path = tmp_path / "gray.png"
    io.imsave(str(path), img, check_contrast=False)
    return path


@pytest.fixture
def color_png(tmp_path):
    rng = np.random.default_rng(5)
    img = rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8)
    path = tmp_path / "color.png"
    io.imsave(str(path), img, check_contrast=False)
    return path


class TestParser:
    """Test argument parsing."""

    def test_defaults_left_to_config(self) -> None:
        """Test unset options stay None so config values apply."""
        args = build_parser().parse_args(["img.png"])
        assert args.depth is None
        assert args.quantization is None
        assert args.edge is None
        assert not args.color

    def test_edge_choices(self) -> None:
        """Test unknown edge policies are rejected by argparse."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["img.png", "--edge", "mirror"])


class TestLoadImage:
    """Test image loading."""

    def test_gray(self, gray_png) -> None:
        """Test gray PNG loads as float32 in [0, 1]."""
        img = load_image(gray_png, keep_color=False)
        assert img.shape == (64, 64)
        assert img.dtype == np.float32
        assert 0.0 <= img.min() <= img.max() <= 1.0

    def test_color_to_gray(self, color_png) -> None:
        """Test RGB input is converted to gray by default."""
        assert load_image(color_png, keep_color=False).shape == (64, 64)

    def test_keep_color(self, color_png) -> None:
        """Test --color keeps three channels."""
        assert load_image(color_png, keep_color=True).shape == (64, 64, 3)

    def test_gray_alpha(self, tmp_path) -> None:
        """Test a gray + alpha PNG loads its gray channel."""
        gray = np.tile(np.arange(0, 256, 4, dtype=np.uint8), (64, 1))
        alpha = np.full((64, 64), 255, dtype=np.uint8)
        path = tmp_path / "gray_alpha.png"
        io.imsave(str(path), np.stack([gray, alpha], axis=-1), check_contrast=False)

        img = load_image(path, keep_color=False)
        assert img.shape == (64, 64)
        np.testing.assert_allclose(img, gray / 255.0, atol=1e-6)


class TestMain:
    """Test the full CLI run."""

    def test_gray_run(self, gray_png, tmp_path, capsys) -> None:
        """Test a lossless run prints timings and writes the output."""
        output = tmp_path / "out" / "decoded.png"
        code = main(
            [str(gray_png), "--depth", "3", "--quantization", "0", "--output", str(output)]
        )
        assert code == 0

        captured = capsys.readouterr().out
        assert "Laplace-Pyramid creation took" in captured
        assert "Laplace-Pyramid decode took" in captured
        assert "Decoded shape: 61x61 (input 64x64)" in captured
        assert output.exists()
        assert io.imread(str(output)).shape == (61, 61)

    def test_color_run(self, color_png, tmp_path, capsys) -> None:
        """Test --color encodes each channel and saves an RGB result."""
        output = tmp_path / "decoded_rgb.png"
        code = main(
            [str(color_png), "--depth", "3", "--quantization", "0", "--color", "--output", str(output)]
        )
        assert code == 0
        captured = capsys.readouterr().out
        assert "channel 2 creation took" in captured
        assert io.imread(str(output)).shape == (61, 61, 3)

    def test_config_file(self, gray_png, tmp_path, capsys) -> None:
        """Test depth comes from the config file when not given on the CLI."""
        config = tmp_path / "custom.toml"
        config.write_text("[pyramid]\ndepth = 2\nquantization = 0.0\n")
        assert main([str(gray_png), "--config", str(config)]) == 0
        # 64 -> 61 for depth 2
        assert "Decoded shape: 61x61" in capsys.readouterr().out

    def test_image_too_small(self, tmp_path, capsys) -> None:
        """Test ScalingImpossible exits with code 2."""
        path = tmp_path / "tiny.png"
        io.imsave(str(path), np.full((4, 4), 128, dtype=np.uint8), check_contrast=False)
        assert main([str(path), "--depth", "5"]) == 2
        assert "error:" in capsys.readouterr().err

    def test_missing_config(self, gray_png, tmp_path, capsys) -> None:
        """Test an explicit missing config file exits with code 2."""
        assert main([str(gray_png), "--config", str(tmp_path / "nope.toml")]) == 2
        assert "Config file not found" in capsys.readouterr().err

    def test_invalid_depth(self, gray_png, capsys) -> None:
        """Test an invalid override exits with code 2."""
        assert main([str(gray_png), "--depth", "0"]) == 2
        assert "error:" in capsys.readouterr().err

    def test_malformed_config(self, gray_png, tmp_path, capsys) -> None:
        """Test a config file that is not valid TOML exits with code 2."""
        config = tmp_path / "broken.toml"
        config.write_text("[pyramid\ndepth = 2\n")
        assert main([str(gray_png), "--config", str(config)]) == 2
        assert "Invalid config file" in capsys.readouterr().err
