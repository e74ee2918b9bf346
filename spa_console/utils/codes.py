"""
Генерация последовательных человекочитаемых кодов (BK001, NV012, DV003).
"""

import re
from typing import Iterable


def code_number(prefix: str, code: str) -> int:
    """Числовой суффикс кода, 0 если кода нет или он не разбирается."""
    match = re.match(rf"^{re.escape(prefix)}(\d+)", code or "")
    return int(match.group(1)) if match else 0


def next_sequential_code(prefix: str, codes: Iterable[str], width: int = 3) -> str:
    """
    Следующий код после максимального числового суффикса.

    Коды без числа после префикса считаются нулем.

    Examples:
        >>> next_sequential_code("BK", ["BK001", "BK017", ""])
        'BK018'
    """
    highest = max((code_number(prefix, code) for code in codes), default=0)
    return f"{prefix}{highest + 1:0{width}d}"
