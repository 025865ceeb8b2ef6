'''
tabla de símbolos: predefinidos, etiquetas (pasada 1) y variables (pasada 2)
'''

from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .isa import PREDEFINED
from .utils import ADDRESS_LIMIT, is_address
from .diagnostics import AddressSpaceExhausted, DuplicateSymbol, ValueOutOfRange

VARIABLE_BASE = 16

class SymbolTable:
    """Mapeo nombre -> dirección de 15 bits.

    Sólo se modifica con bind_label/bind_variable, que fallan si el nombre ya existe
    (aunque el valor coincida). lookup es una lectura pura.
    """

    def __init__(self, *, variable_base: int = VARIABLE_BASE):
        self._mapping: Dict[str, int] = dict(PREDEFINED)
        self._labels: Dict[str, int] = {}
        self._variables: Dict[str, int] = {}
        self._next_variable = variable_base

    def __contains__(self, name: str) -> bool:
        return name in self._mapping

    def __len__(self) -> int:
        return len(self._mapping)

    def lookup(self, name: str) -> Optional[int]:
        return self._mapping.get(name)

    def bind_label(self, name: str, address: int) -> None:
        if not is_address(address):
            raise ValueOutOfRange(f"Dirección de etiqueta fuera de rango: {name} = {address}")
        self._insert(name, address)
        self._labels[name] = address

    def bind_variable(self, name: str) -> int:
        """Asigna la siguiente dirección libre (16, 17, ...) a una variable nueva."""
        address = self._next_variable
        if address >= ADDRESS_LIMIT:
            raise AddressSpaceExhausted(
                f"No se pueden reservar más variables: '{name}' necesitaría la dirección {address}",
                hint=f"el límite es {ADDRESS_LIMIT}",
            )
        self._insert(name, address)
        self._variables[name] = address
        self._next_variable += 1
        return address

    def labels(self) -> Mapping[str, int]:
        return MappingProxyType(self._labels)

    def variables(self) -> Mapping[str, int]:
        return MappingProxyType(self._variables)

    def _insert(self, name: str, value: int) -> None:
        prev = self._mapping.get(name)
        if prev is not None:
            raise DuplicateSymbol(
                f"Símbolo redefinido: {name!r} (valor previo {prev}, nuevo {value})"
            )
        self._mapping[name] = value
