"""Field types shared by the record models."""

from typing import Union

Number = Union[int, float]
