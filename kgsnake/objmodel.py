"""Reading polygon models from Wavefront OBJ text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Sequence

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class ObjVertex:
    """Geometric vertex in homogeneous coordinates."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0


@dataclass(frozen=True)
class ObjTexCoord:
    """Texture coordinate."""

    u: float = 0.0
    v: float = 0.0
    w: float = 1.0


@dataclass(frozen=True)
class ObjNormal:
    """Vertex normal."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass
class ObjFace:
    """A polygon: its vertices with optional texture coordinates and normals."""

    vertices: list[ObjVertex] = field(default_factory=list)
    tex_coords: list[ObjTexCoord] = field(default_factory=list)
    normals: list[ObjNormal] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)


def _floats(tokens: Sequence[str], count: int) -> list[float]:
    """Read up to ``count`` numbers, stopping at the first one that is not a number."""
    values = [0.0] * count
    for position, token in enumerate(tokens[:count]):
        try:
            values[position] = float(token)
        except ValueError:
            break
    return values


def _index(text: str) -> int:
    """Parse the leading integer of a face index; an empty field means 0."""
    if not text:
        return 0
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"invalid face index: {text!r}")
    return int(match.group(1))


def _pick(items: Sequence, number: int, what: str):
    if not 1 <= number <= len(items):
        raise ValueError(f"{what} index {number} out of range 1..{len(items)}")
    return items[number - 1]


def parse_obj(lines: Iterable[str]) -> list[ObjFace]:
    """Parse OBJ lines and return the faces with their resolved data.

    Only ``v``, ``vt``, ``vn`` and ``f`` records are used; everything else is
    ignored. Face indices are 1-based; an index outside the data read so far
    raises ValueError.
    """
    vertices: list[ObjVertex] = []
    tex_coords: list[ObjTexCoord] = []
    normals: list[ObjNormal] = []
    faces: list[ObjFace] = []

    for line in lines:
        tokens = line.split()
        if not tokens:
            continue
        mode, rest = tokens[0], tokens[1:]
        if mode == "v":
            vertices.append(ObjVertex(*_floats(rest, 3)))
        elif mode == "vt":
            tex_coords.append(ObjTexCoord(*_floats(rest, 2)))
        elif mode == "vn":
            normals.append(ObjNormal(*_floats(rest, 3)))
        elif mode == "f":
            face = ObjFace()
            for corner in rest:
                parts = [_index(p) for p in corner.split("/")[:3]]
                parts += [0] * (3 - len(parts))
                v_index, t_index, n_index = parts
                face.vertices.append(_pick(vertices, v_index, "vertex"))
                if t_index > 0:
                    face.tex_coords.append(_pick(tex_coords, t_index, "texture coordinate"))
                if n_index > 0:
                    face.normals.append(_pick(normals, n_index, "normal"))
            faces.append(face)
    return faces


class ObjModel:
    """A model whose faces are read from OBJ files and handed out once for drawing."""

    def __init__(self) -> None:
        self._faces: list[ObjFace] = []

    @property
    def faces(self) -> tuple[ObjFace, ...]:
        return tuple(self._faces)

    def load(self, filename: str) -> int:
        """Read faces from a file, append them and return how many were read."""
        try:
            with open(filename, encoding="utf-8", errors="replace") as stream:
                faces = parse_obj(stream)
        except OSError as exc:
            raise OSError(f"File {filename} can`t be opened!") from exc
        self._faces.extend(faces)
        return len(faces)

    def take_faces(self) -> list[ObjFace]:
        """Return the loaded faces and forget them, as after compiling them for drawing."""
        faces, self._faces = self._faces, []
        return faces