# wdel3d/mesh.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

from .geom import Pt
from .predicates import orient3d

FaceKey = Tuple[int, int, int]  # відсортована трійка вершин грані

@dataclass
class Tet:
    """
    Тетраедр у сітці.
    v[i]: вершина, протилежна грані i. Отже, грань i містить три вершини v[(i+1)%4], v[(i+2)%4], v[(i+3)%4].
    nbr[i]: сусід через грань i (індекс тетра, або -1 якщо межа).
    """
    v: Tuple[int, int, int, int]
    nbr: List[int] = field(default_factory=lambda: [-1, -1, -1, -1])

    def face_vertices(self, i: int) -> Tuple[int, int, int]:
        a, b, c, d = self.v
        if i == 0: return (b, c, d)
        if i == 1: return (a, c, d)
        if i == 2: return (a, b, d)
        return (a, b, c)

class TetMesh:
    """
    Тетра-сітка для перевірки результату рушія:
      - points: список Pt (координати ґратки)
      - tets: масив Tet
      - facemap: sorted(face) -> [(tet_id, local_face_idx), ...]
    """
    def __init__(self, points: List[Pt]):
        self.points: List[Pt] = points[:]
        self.tets: List[Tet] = []
        self.facemap: Dict[FaceKey, List[Tuple[int, int]]] = {}

    @classmethod
    def from_tets(cls, points: List[Pt], tets: Iterable[Sequence[int]]) -> "TetMesh":
        """
        Збирає TetMesh з готових тетраедрів (індекси у points):
          1) add_tet(...)
          2) за facemap відновлює сусідів.
        """
        mesh = cls(points)
        for (i0, i1, i2, i3) in tets:
            mesh.add_tet(int(i0), int(i1), int(i2), int(i3))
        for lst in mesh.facemap.values():
            if len(lst) == 2:
                (t1, f1), (t2, f2) = lst
                mesh.link(t1, f1, t2, f2)
        return mesh

    def add_tet(self, v0: int, v1: int, v2: int, v3: int) -> int:
        tid = len(self.tets)
        t = Tet((v0, v1, v2, v3))
        # зорієнтуємо тетраедр так, щоб orient3d(v0,v1,v2,v3) > 0
        if orient3d(self.points[v0], self.points[v1], self.points[v2], self.points[v3]) < 0:
            t.v = (v0, v2, v1, v3)
        self.tets.append(t)
        for i in range(4):
            key = tuple(sorted(t.face_vertices(i)))
            self.facemap.setdefault(key, []).append((tid, i))
        return tid

    def link(self, ta: int, fa: int, tb: int, fb: int) -> None:
        self.tets[ta].nbr[fa] = tb
        self.tets[tb].nbr[fb] = ta

    def extract_boundary_faces(self) -> List[Tuple[int, int, int]]:
        """Усі граничні трикутники (грань має рівно 1 інцидентний тет)."""
        return [key for key, lst in self.facemap.items() if len(lst) == 1]

    # ---------- валідація сітки ----------
    def validate(self) -> dict:
        """
        Перевірка коректності тетра-сітки:
          - кожна тетра має ненульовий об'єм (орієнтація після add_tet позитивна);
          - гранична грань має рівно 1 інцидентний тет, внутрішня: рівно 2;
          - сусідства симетричні (дзеркальні посилання).
        Повертає словник з діагностикою (порожні списки = все ок).
        """
        bad_orientation: list[int] = []
        bad_face_multiplicity: list[tuple[tuple[int, int, int], int]] = []
        bad_neighbors: list[tuple[int, int, str]] = []

        for tid, t in enumerate(self.tets):
            a, b, c, d = t.v
            if orient3d(self.points[a], self.points[b], self.points[c], self.points[d]) <= 0:
                bad_orientation.append(tid)

        for key, lst in self.facemap.items():
            if len(lst) not in (1, 2):
                bad_face_multiplicity.append((key, len(lst)))

        for tid, t in enumerate(self.tets):
            for fi in range(4):
                nb = t.nbr[fi]
                key = tuple(sorted(t.face_vertices(fi)))
                if nb == -1:
                    if len(self.facemap.get(key, [])) != 1:
                        bad_neighbors.append((tid, fi, "boundary_face_inconsistent"))
                    continue
                nb_t = self.tets[nb]
                if not any(tuple(sorted(nb_t.face_vertices(fj))) == key and nb_t.nbr[fj] == tid
                           for fj in range(4)):
                    bad_neighbors.append((tid, fi, f"no_backlink_to_{nb}"))

        return {
            "tets": len(self.tets),
            "boundary_faces": len(self.extract_boundary_faces()),
            "bad_orientation": bad_orientation,                # tid із нульовим об'ємом
            "bad_face_multiplicity": bad_face_multiplicity,    # [(face_key, count!=1/2), ...]
            "bad_neighbors": bad_neighbors,                    # [(tid, fi, reason), ...]
        }

def report_problems(report: dict) -> int:
    """Скільки всього проблем у звіті validate()."""
    return (len(report["bad_orientation"])
            + len(report["bad_face_multiplicity"])
            + len(report["bad_neighbors"]))
