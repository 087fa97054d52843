from typing import Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.colors import BoundaryNorm, ListedColormap

from .config import DEFAULT_THEME, THEMES
from .maze import CellType, Grid


def make_colormap(theme: str = DEFAULT_THEME) -> ListedColormap:
    """Colormap indexed by CellType code."""
    colors = THEMES[theme]
    return ListedColormap([colors[t.label] for t in CellType], name=f"grid-{theme}")


def _norm() -> BoundaryNorm:
    # one bin per cell code so imshow never rescales
    n = len(CellType)
    return BoundaryNorm([i - 0.5 for i in range(n + 1)], n)


def draw_grid(ax, grid: Grid, theme: str = DEFAULT_THEME):
    """Draw `grid` on `ax` and return the AxesImage for later updates."""
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_facecolor(THEMES[theme]["wall"])
    return ax.imshow(grid.types, cmap=make_colormap(theme), norm=_norm(), interpolation="nearest")


def update_image(image, grid: Grid) -> None:
    image.set_data(grid.types)
    h, w = grid.shape
    image.set_extent((-0.5, w - 0.5, h - 0.5, -0.5))
    image.axes.set_xlim(-0.5, w - 0.5)
    image.axes.set_ylim(h - 0.5, -0.5)


def set_theme(image, theme: str) -> None:
    image.set_cmap(make_colormap(theme))
    image.axes.set_facecolor(THEMES[theme]["wall"])


def render_grid(
    grid: Grid,
    savepath: Optional[str] = None,
    theme: str = DEFAULT_THEME,
    figsize: Tuple[int, int] = (6, 6),
    title: Optional[str] = None,
) -> None:
    fig, ax = plt.subplots(figsize=figsize)
    draw_grid(ax, grid, theme)
    if title:
        ax.set_title(title)
    if savepath:
        fig.savefig(savepath, bbox_inches="tight")
        print(f"Saved visual to {savepath}")
    plt.close(fig)
