"""Tests for the command line entry point."""

from py_vcanvas.cli import build_parser, main
from py_vcanvas.config import Settings


class TestCli:
    """Test headless runs."""

    def test_parser_defaults_from_settings(self):
        settings = Settings(_env_file=None, width=320, number_of_points=50)
        args = build_parser(settings).parse_args([])

        assert args.width == 320
        assert args.points == 50
        assert not args.headless

    def test_headless_run_saves_image(self, tmp_path):
        output = tmp_path / "result" / "CURRENT.png"
        code = main(["--width", "40", "--height", "30", "--points", "25",
                     "--relaxation", "1", "--seed", "3", "--headless",
                     "--output", str(output), "--log-level", "WARNING"],
                    settings=Settings(_env_file=None))

        assert code == 0
        assert output.exists()

    def test_impossible_point_count_fails(self, tmp_path):
        code = main(["--width", "4", "--height", "4", "--points", "50", "--headless",
                     "--output", str(tmp_path / "x.png"), "--log-level", "WARNING"],
                    settings=Settings(_env_file=None))

        assert code == 1
        assert not (tmp_path / "x.png").exists()
