from pathlib import Path

import pytest

from kickstart.config import (
    CFG_FILE,
    Config,
    ConfigCoerceError,
    apply_overrides,
    cfg_path,
    load_config,
)
from kickstart.errors import KickstartUserError
from tests.infrastructure.project_builders import create_config


def test_no_config_file_gives_defaults(tmp_path: Path):
    cfg = load_config(tmp_path)
    assert cfg == Config()
    assert cfg.dir_build == "build"
    assert cfg.components_dir == "components"
    assert cfg.dir_assets_css == ["assets", "css"]
    assert [e.files for e in cfg.build.statics.copy][1] == ["**/*.js"]
    assert cfg.build.statics.svg_sprite[0].destination_file[-1] == "icon-sprite.svg"
    assert cfg_path(tmp_path) == tmp_path / CFG_FILE


def test_empty_config_file_gives_defaults(tmp_path: Path):
    create_config(tmp_path, "")
    assert load_config(tmp_path) == Config()


def test_user_values_override_and_keep_nested_defaults(tmp_path: Path):
    create_config(tmp_path, """
        dir_build: dist
        console:
          prod:
            quiet: true
        build:
          css:
            sass:
              output_style: compressed
          statics:
            image_minify:
              jpeg_quality: 70
    """)
    cfg = load_config(tmp_path)

    assert cfg.dir_build == "dist"
    assert cfg.dir_working == "./"
    assert cfg.build.css.sass.output_style == "compressed"
    assert cfg.build.css.sass.files_exclude == []
    assert cfg.build.css.minify.keep_bang_comments is True
    assert cfg.build.statics.image_minify.jpeg_quality == 70
    assert cfg.build.statics.image_minify.webp_quality == 80
    # statics.copy was not mentioned
    assert len(cfg.build.statics.copy) == 2
    assert cfg.console_for("prod").quiet is True


def test_copy_entries_from_yaml(tmp_path: Path):
    create_config(tmp_path, """
        build:
          statics:
            copy:
              - options:
                  mode: prod
                  source_dir: vendor
                  flatten: false
                files: ["**/*.woff2"]
              - files: ["robots.txt"]
    """)
    cfg = load_config(tmp_path)
    first, second = cfg.build.statics.copy
    assert first.options.modes() == ["prod"]
    assert first.options.source_dir == "vendor"
    assert first.options.flatten is False
    assert first.files == ["**/*.woff2"]
    assert second.options.modes() == ["dev", "prod"]
    assert second.options.destination_dir is None


def test_unknown_key_names_its_path(tmp_path: Path):
    create_config(tmp_path, """
        build:
          css:
            sass:
              outputStyle: compressed
    """)
    with pytest.raises(ConfigCoerceError) as ei:
        load_config(tmp_path)
    assert str(ei.value).startswith("build.css.sass: unexpected keys:")
    assert isinstance(ei.value, KickstartUserError)


def test_wrong_type_names_its_path(tmp_path: Path):
    create_config(tmp_path, """
        build:
          statics:
            image_minify:
              jpeg_quality: high
    """)
    with pytest.raises(ConfigCoerceError) as ei:
        load_config(tmp_path)
    assert "build.statics.image_minify.jpeg_quality" in str(ei.value)


def test_literal_value_is_checked(tmp_path: Path):
    create_config(tmp_path, """
        build:
          css:
            sass:
              output_style: pretty
    """)
    with pytest.raises(ConfigCoerceError):
        load_config(tmp_path)


def test_invalid_yaml_is_a_config_error(tmp_path: Path):
    create_config(tmp_path, "dir_build: [unclosed\n")
    with pytest.raises(ConfigCoerceError) as ei:
        load_config(tmp_path)
    assert "invalid YAML" in str(ei.value)


def test_top_level_must_be_mapping(tmp_path: Path):
    create_config(tmp_path, "- a\n- b\n")
    with pytest.raises(ConfigCoerceError):
        load_config(tmp_path)


def test_explicit_config_path(tmp_path: Path):
    other = tmp_path / "conf" / "site.yaml"
    other.parent.mkdir()
    other.write_text("dir_build: out\n", encoding="utf-8")
    assert load_config(tmp_path, other).dir_build == "out"


def test_apply_overrides():
    cfg = apply_overrides(Config(), dir_build="public", dir_working="src")
    assert (cfg.dir_build, cfg.dir_working) == ("public", "src")
    cfg = apply_overrides(cfg)
    assert (cfg.dir_build, cfg.dir_working) == ("public", "src")


def test_console_for_unknown_mode_falls_back():
    cfg = Config()
    assert cfg.console_for("dev").verbose is True
    assert cfg.console_for("prod").verbose is False
    assert cfg.console_for("staging").verbose is True


def test_broken_sass_exclude_regex_names_its_path(tmp_path: Path):
    create_config(tmp_path, """
        build:
          css:
            sass:
              files_exclude: ["print", "("]
    """)
    with pytest.raises(ConfigCoerceError) as ei:
        load_config(tmp_path)
    assert ei.value.path == ("build", "css", "sass", "files_exclude")
    assert "invalid regular expression" in str(ei.value)


@pytest.mark.parametrize("mode", ["prdo", "[dev, staging]"])
def test_copy_mode_typo_is_rejected(tmp_path: Path, mode):
    create_config(tmp_path, f"""
        build:
          statics:
            copy:
              - options:
                  mode: {mode}
    """)
    with pytest.raises(ConfigCoerceError) as ei:
        load_config(tmp_path)
    assert ei.value.path == ("build", "statics", "copy", "0", "options", "mode")
