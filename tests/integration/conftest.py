"""Integration test fixtures: a small folder of markdown notes."""

from __future__ import annotations

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Note contents
# ---------------------------------------------------------------------------

NOTES = {
    "home/errands.md": """# Errands

- [ ] Buy milk #task 📅 2022-01-14
- [x] Post letter #task ✅ 2022-01-10
- [ ] Not tracked, no global filter

## Garden

- [ ] Mow lawn #task #outside ⏫
""",
    "work/projects/report.md": """# Report

- [ ] Draft outline #task 🆔 outline
- [ ] Write chapters #task ⛔ outline
- [/] Collect figures #task #outside

```
- [ ] Example inside a code block #task
```
""",
    ".obsidian/ignored.md": "- [ ] hidden #task\n",
}


@pytest.fixture
def vault(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Markdown notes under ``temp_dir/vault``, which is also the working directory."""
    root = temp_dir / "vault"
    for relative, content in NOTES.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Config with a global filter and no global query."""
    path = temp_dir / "config.toml"
    path.write_text("""[query]
global_filter = "#task"

[display]
colored_output = false
""")
    return path
