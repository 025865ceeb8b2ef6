from __future__ import annotations
import os
from typing import Iterable, List
from .utils import to_bin16
from .encoding import Encoded
from .diagnostics import ResourceError

def to_bin_lines(words: Iterable[Encoded]) -> List[str]:
    return [to_bin16(w.word) for w in words]

def write_lines(lines: Iterable[str], path: str) -> None:
    """Escribe una línea por elemento, terminada en '\\n'.

    Si la escritura falla, borra el archivo a medio escribir y lanza ResourceError.
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
    except OSError as ex:
        msg = f"no pude escribir {path}: {ex}"
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as rm_err:
            msg += f"; tampoco pude borrar la salida parcial: {rm_err}"
        raise ResourceError(msg) from ex

def write_bin(words: Iterable[Encoded], path: str) -> None:
    write_lines(to_bin_lines(words), path)

def write_text(text: str, path: str) -> None:
    write_lines(text.splitlines(), path)
