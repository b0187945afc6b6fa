import os
import tempfile
import textwrap
import unittest
from pathlib import Path
from unittest.mock import patch

from app_config import (
    AppConfig,
    AppConfigurationError,
    load_app_config,
    log_level_value,
    resolve_config_path,
)
from pomodoro import TimeConfiguration


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class AppConfigLoadingTests(unittest.TestCase):
    def test_load_app_config_reads_pomodoro_section(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(
                config_path,
                textwrap.dedent(
                    """
                    [pomodoro]
                    work_minutes = 50
                    short_break_minutes = 10
                    long_break_minutes = 30
                    work_intervals_before_long_break = 2

                    [logging]
                    level = "debug"
                    """
                ).strip(),
            )

            app_config = load_app_config(str(config_path), environ={})

        self.assertEqual(str(config_path), app_config.source_file)
        self.assertEqual(50, app_config.pomodoro.work_minutes)
        self.assertEqual(10, app_config.pomodoro.short_break_minutes)
        self.assertEqual(30, app_config.pomodoro.long_break_minutes)
        self.assertEqual(2, app_config.pomodoro.work_intervals_before_long_break)
        self.assertEqual("DEBUG", app_config.logging.level)
        self.assertEqual(10, log_level_value(app_config.logging))

        time_config = TimeConfiguration.from_settings(app_config.pomodoro)
        self.assertEqual(
            TimeConfiguration(
                work_duration=50,
                short_break_duration=10,
                long_break_duration=30,
                work_intervals_before_long_break=2,
            ),
            time_config,
        )

    def test_missing_sections_use_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[pomodoro]\nwork_minutes = 30\n")

            app_config = load_app_config(str(config_path), environ={})

        self.assertEqual(30, app_config.pomodoro.work_minutes)
        self.assertEqual(5, app_config.pomodoro.short_break_minutes)
        self.assertEqual(15, app_config.pomodoro.long_break_minutes)
        self.assertEqual(4, app_config.pomodoro.work_intervals_before_long_break)
        self.assertEqual("INFO", app_config.logging.level)

    def test_negative_and_zero_durations_pass_through(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(
                config_path,
                "[pomodoro]\nwork_minutes = 0\nshort_break_minutes = -5\n",
            )

            app_config = load_app_config(str(config_path), environ={})

        self.assertEqual(0, app_config.pomodoro.work_minutes)
        self.assertEqual(-5, app_config.pomodoro.short_break_minutes)

    def test_invalid_value_types_are_rejected(self) -> None:
        cases = {
            "work_minutes = \"soon\"": "pomodoro.work_minutes",
            "long_break_minutes = true": "pomodoro.long_break_minutes",
            "short_break_minutes = 2.5": "pomodoro.short_break_minutes",
        }
        for line, field in cases.items():
            with self.subTest(line=line):
                with tempfile.TemporaryDirectory() as temp_dir:
                    config_path = Path(temp_dir) / "config.toml"
                    _write_text(config_path, f"[pomodoro]\n{line}\n")

                    with self.assertRaises(AppConfigurationError) as ctx:
                        load_app_config(str(config_path), environ={})

                self.assertIn(field, str(ctx.exception))

    def test_string_integers_are_accepted(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[pomodoro]\nwork_minutes = \" 45 \"\n")

            app_config = load_app_config(str(config_path), environ={})

        self.assertEqual(45, app_config.pomodoro.work_minutes)

    def test_section_must_be_table(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "pomodoro = 3\n")

            with self.assertRaises(AppConfigurationError) as ctx:
                load_app_config(str(config_path), environ={})

        self.assertIn("[pomodoro] must be a table", str(ctx.exception))

    def test_unknown_log_level_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[logging]\nlevel = \"loud\"\n")

            with self.assertRaises(AppConfigurationError):
                load_app_config(str(config_path), environ={})

    def test_malformed_toml_is_reported(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[pomodoro\nwork_minutes = 1\n")

            with self.assertRaises(AppConfigurationError) as ctx:
                load_app_config(str(config_path), environ={})

        self.assertIn("Failed to parse config TOML", str(ctx.exception))

    def test_missing_explicit_file_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = Path(temp_dir) / "absent.toml"
            with self.assertRaises(AppConfigurationError):
                load_app_config(str(missing), environ={})

    def test_missing_env_file_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = Path(temp_dir) / "absent.toml"
            with self.assertRaises(AppConfigurationError):
                load_app_config(environ={"POMODORO_CONFIG_FILE": str(missing)})

    def test_directory_path_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(AppConfigurationError):
                load_app_config(temp_dir, environ={})

    def test_missing_default_file_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with patch("app_config.Path.cwd", return_value=Path(temp_dir)):
                app_config = load_app_config(environ={})

        self.assertEqual(AppConfig(), app_config)
        self.assertEqual("", app_config.source_file)

    def test_resolve_config_path_prefers_explicit_then_env(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            explicit = Path(temp_dir) / "explicit.toml"
            from_env = Path(temp_dir) / "env.toml"
            environ = {"POMODORO_CONFIG_FILE": str(from_env)}

            self.assertEqual(explicit, resolve_config_path(str(explicit), environ=environ))
            self.assertEqual(from_env, resolve_config_path(environ=environ))

    def test_resolve_config_path_uses_process_environment(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            from_env = Path(temp_dir) / "env.toml"
            with patch.dict(os.environ, {"POMODORO_CONFIG_FILE": str(from_env)}):
                self.assertEqual(from_env, resolve_config_path())


if __name__ == "__main__":
    unittest.main()
