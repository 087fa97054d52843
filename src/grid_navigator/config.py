from typing import Dict

# --- Maze size -----------------------------------------------------
MIN_SIZE = 5
MAX_SIZE = 50
DEFAULT_SIZE = 25
SIZE_PRESETS = (5, 25, 50)

# --- Animation speed (base delay per step, ms) ---------------------
SPEED_DELAYS: Dict[str, int] = {"slow": 40, "normal": 20, "fast": 5}
DEFAULT_SPEED = "fast"

# --- Search --------------------------------------------------------
ALGORITHMS = ("bfs", "dfs")
DEFAULT_ALGORITHM = "bfs"

# --- Themes (colour per cell type name) ----------------------------
THEMES: Dict[str, Dict[str, str]] = {
    "dark": {
        "wall": "#0B1020",
        "passage": "#1C2541",
        "start": "#00FF7F",
        "end": "#FF4500",
        "visited": "#3A506B",
        "path": "#FFD166",
        "pathHead": "#FF1493",
    },
    "light": {
        "wall": "#2B2B2B",
        "passage": "#F5F1E8",
        "start": "#2E8B57",
        "end": "#C0392B",
        "visited": "#BFD7EA",
        "path": "#F4A261",
        "pathHead": "#E63946",
    },
}
THEME_LABELS = {"dark": "Midnight", "light": "Paper"}
DEFAULT_THEME = "dark"


def clamp_size(n: int) -> int:
    """Clamp a logical maze dimension into [MIN_SIZE, MAX_SIZE]."""
    return min(MAX_SIZE, max(MIN_SIZE, int(n)))


def base_delay(speed: str) -> int:
    try:
        return SPEED_DELAYS[speed]
    except KeyError:
        raise ValueError(f"Unknown speed {speed!r}; expected one of {sorted(SPEED_DELAYS)}") from None
