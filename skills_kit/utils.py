from pathlib import Path


def relative_to_parent(path: str | Path, root: Path) -> str:
    """Render ``path`` relative to the parent of ``root`` when it lives there."""
    try:
        return str(Path(path).resolve().relative_to(root.resolve().parent))
    except ValueError:
        return str(path)


def compact_home_path(path: str | Path) -> str:
    text = str(path)
    home = str(Path.home())
    if text == home:
        return "~"
    home_prefix = f"{home}/"
    if text.startswith(home_prefix):
        return f"~/{text[len(home_prefix):]}"
    return text
