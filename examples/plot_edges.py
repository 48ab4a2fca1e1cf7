# examples/plot_edges.py
"""
Малює скелет ребер поверх хмари точок.

    python examples/plot_edges.py points.xyzw edges.txt [--out skeleton.png]

Без edges.txt ребра рахуються на льоту через triangulate_edges().
Потрібен matplotlib: pip install .[viz]
"""
from __future__ import annotations

import argparse

import numpy as np

import matplotlib
from matplotlib import pyplot as plt
from mpl_toolkits.mplot3d.art3d import Line3DCollection

from wdel3d.edges import vertex_degrees
from wdel3d.io import load_points
from wdel3d.pipeline import triangulate_edges


def set_equal_scale(ax, xyz: np.ndarray) -> None:
    """Однакові масштаби по осях (інакше куб виглядає як паралелепіпед)."""
    lo = xyz.min(axis=0)
    hi = xyz.max(axis=0)
    mid = 0.5 * (lo + hi)
    r = float((hi - lo).max()) or 1.0
    ax.set_xlim(mid[0] - r / 2, mid[0] + r / 2)
    ax.set_ylim(mid[1] - r / 2, mid[1] + r / 2)
    ax.set_zlim(mid[2] - r / 2, mid[2] + r / 2)


def plot_skeleton(xyz: np.ndarray, weights: np.ndarray, edges: np.ndarray, title: str = ""):
    fig = plt.figure(figsize=(7, 6))
    ax = fig.add_subplot(111, projection="3d")

    if len(edges):
        segs = np.stack([xyz[edges[:, 0]], xyz[edges[:, 1]]], axis=1)
        ax.add_collection3d(Line3DCollection(segs, linewidths=0.5, colors="0.35"))

    # точки без жодного ребра (зайві у регулярній тріангуляції): червоним
    deg = vertex_degrees(edges, len(xyz))
    used = deg > 0
    ax.scatter(*xyz[used].T, c=weights[used], cmap="viridis", s=12, depthshade=False)
    if (~used).any():
        ax.scatter(*xyz[~used].T, c="red", marker="x", s=20, label="redundant")
        ax.legend(loc="upper right")

    set_equal_scale(ax, xyz)
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.set_zlabel("Z")
    ax.set_title(title or f"{len(edges)} edges")
    return fig


def main():
    ap = argparse.ArgumentParser(description="Plot a weighted Delaunay edge skeleton")
    ap.add_argument("points", help=".xyzw input")
    ap.add_argument("edges", nargs="?", help="edge list written by edges-weighted-delaunay3d")
    ap.add_argument("--out", help="save to file instead of showing a window")
    args = ap.parse_args()

    if args.out:
        matplotlib.use("Agg")

    loaded = load_points(args.points)
    xyz = np.array([(p.x, p.y, p.z) for p in loaded.points], dtype=float).reshape(-1, 3)
    weights = np.array([p.w for p in loaded.points], dtype=float)

    if args.edges:
        edges = np.loadtxt(args.edges, dtype=np.int64, ndmin=2).reshape(-1, 2)
    else:
        edges = triangulate_edges(loaded.points, loaded.extent).edges

    fig = plot_skeleton(xyz, weights, edges)
    if args.out:
        fig.savefig(args.out, dpi=150)
        print(f"{args.out} записано.")
    else:
        plt.show()


if __name__ == "__main__":
    main()
