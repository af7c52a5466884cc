from enum import Enum


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    DIM = "dim"
    WHITE = "white"


IMPACT_STYLE = {
    "CRITICAL": UIStyle.RED.value,
    "HIGH": UIStyle.YELLOW.value,
    "MEDIUM-HIGH": UIStyle.YELLOW.value,
    "MEDIUM": UIStyle.CYAN.value,
    "LOW-MEDIUM": UIStyle.DIM.value,
    "LOW": UIStyle.DIM.value,
}
