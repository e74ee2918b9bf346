"""
Сервис для форматирования временных слотов в человекочитаемый формат.
"""
from typing import List, Tuple

from spa_console.services.time_grid import SLOT_STEP_MINUTES, from_minutes, to_minutes


class SlotFormatter:
    """
    Форматирует список слотов сетки в удобный для чтения вид.
    Группирует последовательные слоты в диапазоны.
    """

    @staticmethod
    def group_slots(slots: List[str], step: int = SLOT_STEP_MINUTES) -> List[Tuple[str, str]]:
        """
        Группирует слоты в диапазоны [начало, конец).

        Examples:
            ['10:00', '10:10', '10:20', '14:30'] ->
            [('10:00', '10:30'), ('14:30', '14:40')]
        """
        if not slots:
            return []

        minutes = [to_minutes(slot) for slot in slots]
        ranges = []
        range_start = range_end = minutes[0]

        for value in minutes[1:]:
            if value == range_end + step:
                range_end = value
            else:
                ranges.append((range_start, range_end))
                range_start = range_end = value
        ranges.append((range_start, range_end))

        # Конец диапазона - начало следующего слота
        return [(from_minutes(start), from_minutes(end + step)) for start, end in ranges]

    @staticmethod
    def format_slots_to_ranges(slots: List[str], step: int = SLOT_STEP_MINUTES) -> str:
        """
        Форматирует список слотов в строку с диапазонами.

        Args:
            slots: Список слотов в формате "H:MM"
            step: Шаг сетки в минутах

        Returns:
            Отформатированная строка с диапазонами времени

        Examples:
            ['10:00', '10:10', '10:20', '14:30', '14:40'] ->
            "с 10:00 до 10:30 и с 14:30 до 14:50"
        """
        formatted = []
        for start, end in SlotFormatter.group_slots(slots, step):
            if to_minutes(end) - to_minutes(start) == step:
                formatted.append(f"в {start}")
            else:
                formatted.append(f"с {start} до {end}")

        if not formatted:
            return ""
        if len(formatted) == 1:
            return formatted[0]
        if len(formatted) == 2:
            return f"{formatted[0]} и {formatted[1]}"
        return f"{', '.join(formatted[:-1])}, а также {formatted[-1]}"
