"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local stylecomplete package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A small project with stylesheets, vendored CSS and a component."""
    root = tmp_path / "project"
    (root / "src" / "styles").mkdir(parents=True)
    (root / "node_modules" / "lib").mkdir(parents=True)

    (root / "src" / "styles" / "base.css").write_text(
        ".header { color: red; }\n.footer { color: blue; }\n"
    )
    (root / "src" / "styles" / "mixins.pcss").write_text(
        "@define-mixin button { padding: 10px; }\n@define-mixin card { margin: 10px; }\n"
    )
    (root / "node_modules" / "lib" / "vendor.css").write_text(".vendor-only { color: green; }\n")
    (root / "src" / "App.tsx").write_text(
        'export const App = () => <div className="he" />;\n'
    )
    return root
