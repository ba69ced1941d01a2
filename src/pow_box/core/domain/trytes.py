"""Tipos de valor del ledger: `Trytes` y `Hash`.

Por qué en el dominio:
- Validan en construcción; una vez creados son inmutables y siempre válidos.
- El adaptador PoW solo serializa/deserializa, no valida alfabetos.
"""

from __future__ import annotations

import re
from typing import ClassVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.config import ConfigDict

from pow_box.core.errors import ValidationError

ALPHABET = "9ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class Trytes(BaseModel):
    """Cadena de trytes (alfabeto `[9A-Z]`) de longitud variable.

    Usar `Trytes.from_string` en vez del constructor: convierte los errores de
    validación en `ValidationError` del Core.
    """

    model_config = ConfigDict(frozen=True)

    ALPHABET: ClassVar[str] = ALPHABET

    value: str = Field(..., pattern=r"^[9A-Z]*$")

    @classmethod
    def from_string(cls, value: str, length: int = 0) -> "Trytes":
        """Crea trytes desde un string; `length=0` ignora la longitud."""

        if not isinstance(value, str):
            raise ValidationError("The value must be a non empty string")
        if not isinstance(length, int) or isinstance(length, bool) or length < 0:
            raise ValidationError("The length must be >= 0")
        if not cls.is_valid(value, length):
            raise ValidationError(
                "The value and length do not contain valid trytes",
                {"value": value, "length": length},
            )
        try:
            return cls(value=value)
        except PydanticValidationError as exc:  # pragma: no cover - is_valid ya filtra
            raise ValidationError("The value does not contain valid trytes", inner_error=exc) from exc

    @staticmethod
    def is_valid(value: object, length: int = 0) -> bool:
        if not isinstance(value, str):
            return False
        quantifier = f"{{{length}}}" if length else "*"
        return re.fullmatch(f"[9A-Z]{quantifier}", value) is not None

    def to_string(self) -> str:
        return self.value

    def length(self) -> int:
        return len(self.value)

    def sub(self, start: int, length: int) -> "Trytes":
        """Sub-rango `[start, start + length)` como nuevos trytes."""

        if not isinstance(start, int) or isinstance(start, bool) or start < 0:
            raise ValidationError("The start must be a number >= 0")
        if not isinstance(length, int) or isinstance(length, bool) or start + length > len(self.value):
            raise ValidationError(f"The start + length must <= {len(self.value)}")
        return Trytes.from_string(self.value[start : start + length])

    def __str__(self) -> str:
        return self.value

    def __len__(self) -> int:
        return len(self.value)


class Hash(BaseModel):
    """Hash de transacción: exactamente 81 trytes."""

    model_config = ConfigDict(frozen=True)

    LENGTH: ClassVar[int] = 81
    EMPTY: ClassVar["Hash"]

    value: str = Field(..., min_length=81, max_length=81, pattern=r"^[9A-Z]*$")

    @classmethod
    def from_trytes(cls, trytes: Trytes) -> "Hash":
        if not isinstance(trytes, Trytes):
            raise ValidationError("The hash should be a valid Trytes object")
        if len(trytes) != cls.LENGTH:
            raise ValidationError(
                f"The hash should be {cls.LENGTH} characters in length",
                {"length": len(trytes)},
            )
        return cls(value=str(trytes))

    @classmethod
    def from_string(cls, value: str) -> "Hash":
        return cls.from_trytes(Trytes.from_string(value))

    def to_trytes(self) -> Trytes:
        return Trytes.from_string(self.value)

    def __str__(self) -> str:
        return self.value


# Hash vacío: 81 nueves.
Hash.EMPTY = Hash.from_string("9" * Hash.LENGTH)
