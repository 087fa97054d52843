import tkinter as tk
from tkinter import ttk, messagebox

import matplotlib.pyplot as plt
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

from . import config
from .render import draw_grid, set_theme, update_image
from .scheduler import TkScheduler
from .session import MazeSession


class NavigatorGUI:
    def __init__(self, root, rows: int = config.DEFAULT_SIZE, cols: int = config.DEFAULT_SIZE, seed=None):
        self.root = root
        self.root.title("GridNavigator")
        self.root.geometry("1100x900")

        self.closing = False  # no redraws after close
        self.session = MazeSession(
            TkScheduler(root), rows=rows, cols=cols, on_change=self.on_session_change, seed=seed
        )
        self.theme = config.DEFAULT_THEME

        self.setup_ui()
        self.setup_plot()
        self.refresh()

        self.root.bind("<KeyPress>", self.on_key)
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

    def setup_ui(self):
        main_container = ttk.Frame(self.root)
        main_container.pack(fill=tk.BOTH, expand=True)

        left_frame = ttk.Frame(main_container, width=260)
        left_frame.pack(side=tk.LEFT, fill=tk.Y, padx=10, pady=10)

        right_frame = ttk.Frame(main_container)
        right_frame.pack(side=tk.RIGHT, fill=tk.BOTH, expand=True, padx=10, pady=10)

        self.fig, self.ax_maze = plt.subplots(1, 1, figsize=(8, 8))
        self.canvas = FigureCanvasTkAgg(self.fig, master=right_frame)
        self.canvas.get_tk_widget().pack(fill=tk.BOTH, expand=True)

        # --- Controls (Left Panel) ---
        self.controls = []

        ttk.Label(left_frame, text="Algorithm", font=("Arial", 12, "bold")).pack(anchor="w", pady=5)
        self.var_algo = tk.StringVar(value=self.session.algorithm)
        for value, text in (("bfs", "BFS (shortest path)"), ("dfs", "DFS")):
            rb = ttk.Radiobutton(left_frame, text=text, variable=self.var_algo, value=value,
                                 command=lambda: self.session.set_algorithm(self.var_algo.get()))
            rb.pack(anchor="w")
            self.controls.append(rb)

        ttk.Separator(left_frame, orient=tk.HORIZONTAL).pack(fill=tk.X, pady=10)
        ttk.Label(left_frame, text="Maze size", font=("Arial", 12, "bold")).pack(anchor="w", pady=5)
        size_frame = ttk.Frame(left_frame)
        size_frame.pack(fill=tk.X, pady=2)
        for n in config.SIZE_PRESETS:
            btn = ttk.Button(size_frame, text=f"{n}×{n}", command=lambda n=n: self.session.resize(n, n))
            btn.pack(side=tk.LEFT, expand=True, fill=tk.X)
            self.controls.append(btn)

        ttk.Separator(left_frame, orient=tk.HORIZONTAL).pack(fill=tk.X, pady=10)
        ttk.Label(left_frame, text="Speed", font=("Arial", 12, "bold")).pack(anchor="w", pady=5)
        self.var_speed = tk.StringVar(value=self.session.speed)
        for speed in config.SPEED_DELAYS:
            rb = ttk.Radiobutton(left_frame, text=speed.capitalize(), variable=self.var_speed, value=speed,
                                 command=lambda: self.session.set_speed(self.var_speed.get()))
            rb.pack(anchor="w")
            self.controls.append(rb)

        ttk.Separator(left_frame, orient=tk.HORIZONTAL).pack(fill=tk.X, pady=10)
        ttk.Label(left_frame, text="Theme", font=("Arial", 12, "bold")).pack(anchor="w", pady=5)
        self.var_theme = tk.StringVar(value=config.DEFAULT_THEME)
        for theme, label in config.THEME_LABELS.items():
            rb = ttk.Radiobutton(left_frame, text=label, variable=self.var_theme, value=theme,
                                 command=self.on_theme)
            rb.pack(anchor="w")
            self.controls.append(rb)

        ttk.Separator(left_frame, orient=tk.HORIZONTAL).pack(fill=tk.X, pady=10)

        for text, command in (("New maze", self.on_new), ("Clear path", self.on_clear)):
            btn = ttk.Button(left_frame, text=text, command=command)
            btn.pack(fill=tk.X, pady=5)
            self.controls.append(btn)
        self.btn_solve = ttk.Button(left_frame, text="Solve", command=self.on_solve)
        self.btn_solve.pack(fill=tk.X, pady=5)
        self.controls.append(self.btn_solve)

        self.status_var = tk.StringVar(value="")
        self.stats_var = tk.StringVar(value="")
        ttk.Label(left_frame, textvariable=self.status_var, relief=tk.SUNKEN).pack(fill=tk.X, pady=(10, 2))
        ttk.Label(left_frame, textvariable=self.stats_var).pack(fill=tk.X)
        ttk.Label(
            left_frame,
            text="Space/S = Solve · N = New · C = Clear · 1–3 = Speed",
            wraplength=240,
        ).pack(fill=tk.X, pady=10)

    def setup_plot(self):
        self.img_maze = draw_grid(self.ax_maze, self.session.grid, self.theme)
        self.fig.tight_layout()

    def refresh(self):
        s = self.session
        update_image(self.img_maze, s.grid)
        self.status_var.set(s.status)
        path = s.path_length if s.path_length is not None else "--"
        visited = s.visited_count if s.visited_count is not None else "--"
        self.stats_var.set(f"Path: {path} • Visited: {visited}")

        state = tk.DISABLED if s.is_animating else tk.NORMAL
        for widget in self.controls:
            widget.config(state=state)
        self.btn_solve.config(text="Solving…" if s.is_animating else "Solve")
        self.var_algo.set(s.algorithm)
        self.var_speed.set(s.speed)
        self.canvas.draw_idle()

    def on_session_change(self, session):
        if not self.closing:
            self.refresh()

    def on_new(self):
        self.session.regenerate()

    def on_clear(self):
        self.session.clear_path()

    def on_solve(self):
        try:
            self.session.solve()
        except ValueError as e:
            messagebox.showerror("Error", str(e))

    def on_theme(self):
        self.theme = self.var_theme.get()
        set_theme(self.img_maze, self.theme)
        self.canvas.draw_idle()

    def on_key(self, event):
        # don't trigger when typing into an input
        if isinstance(event.widget, (tk.Entry, ttk.Entry, tk.Text)):
            return
        key = event.keysym.lower()
        if key in ("space", "s"):
            self.on_solve()
        elif key == "n":
            self.on_new()
        elif key == "c":
            self.on_clear()
        elif key in ("1", "2", "3"):
            self.session.set_speed(("slow", "normal", "fast")[int(key) - 1])

    def on_close(self):
        self.closing = True
        self.session.shutdown()
        self.root.destroy()
        plt.close("all")


def launch(rows: int = config.DEFAULT_SIZE, cols: int = config.DEFAULT_SIZE, seed=None) -> None:
    root = tk.Tk()
    NavigatorGUI(root, rows=rows, cols=cols, seed=seed)
    root.mainloop()
