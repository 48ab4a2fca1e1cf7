# examples/demo_pipeline.py
import random

from wdel3d import RawPoint
from wdel3d.pipeline import triangulate_edges

if __name__ == "__main__":
    random.seed(7)
    # куб + внутрішні точки з малими вагами
    cube = [
        (0,0,0), (1,0,0), (1,1,0), (0,1,0),
        (0,0,1), (1,0,1), (1,1,1), (0,1,1),
    ]
    raw = [RawPoint(x, y, z, 0.5) for (x, y, z) in cube]
    raw += [RawPoint(random.random(), random.random(), random.random(), random.random())
            for _ in range(40)]

    res = triangulate_edges(raw, do_check=True)
    print("Vertices:", res.point_count)
    print("Tets:", res.tet_count)
    print("Edges:", res.edge_count)
    print("Timings (ms):", res.timings)
