from pathlib import Path

def get_project_root() -> Path:
    """Repository root (the directory holding pyproject.toml)."""
    return Path(__file__).resolve().parents[3]

PROJECT_ROOT = get_project_root()
