"""Repo-level config file location and starter template.

User config is stored in .stylecomplete/config.yaml at the workspace root.
Only the options users commonly touch are written out; everything else keeps
its built-in default.
"""

from pathlib import Path

from stylecomplete.config.models import CompletionConfig, FilesConfig

CONFIG_DIR_NAME = ".stylecomplete"
CONFIG_FILE_NAME = "config.yaml"


def repo_config_path(root: Path) -> Path:
    """Path of the repo config file for a workspace root."""
    return root / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def _yaml_list(values: list[str]) -> str:
    return "[" + ", ".join(f'"{v}"' for v in values) + "]"


def write_default_config(path: Path) -> None:
    """Write a starter config file with helpful comments.

    Args:
        path: Path to write config.yaml (parent directories are created)
    """
    files = FilesConfig()
    completion = CompletionConfig()

    lines = [
        "# stylecomplete configuration",
        "# Environment variables override this file: STYLECOMPLETE__SECTION__KEY",
        "",
        "files:",
        "  # Stylesheets scanned for class names and mixins (globs, {a,b} supported)",
        f"  class_patterns: {_yaml_list(files.class_patterns)}",
        f"  mixin_patterns: {_yaml_list(files.mixin_patterns)}",
        "  # Extra directory names to skip (node_modules, dist, ... are always skipped)",
        "  # exclude_dirs: [\"vendor\"]",
        "",
        "completion:",
        "  # Attributes and calls whose quoted values get class name completion",
        f"  attribute_names: {_yaml_list(completion.attribute_names)}",
        f"  function_names: {_yaml_list(completion.function_names)}",
        "  # Lines examined when the enclosing call starts above the cursor line",
        f"  # lookback_lines: {completion.lookback_lines}",
        "  # innermost | depth_one",
        f"  # nesting: {completion.nesting}",
        "",
        "# logging:",
        "#   level: INFO",
        "",
    ]

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines))
