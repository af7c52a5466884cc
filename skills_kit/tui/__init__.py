from skills_kit.tui.renderers import SkillsConsoleUI

__all__ = ["SkillsConsoleUI"]
