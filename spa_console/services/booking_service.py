"""
Сервис для создания и редактирования записей с проверкой конфликтов.
"""

import datetime as dt
import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from spa_console.core.config import settings
from spa_console.core.logging_config import log_error
from spa_console.repositories.base import RecordStoreError
from spa_console.repositories.booking_repository import BookingRepository
from spa_console.schemas.booking import Booking, BookingCandidate, SubmissionResult
from spa_console.schemas.enums import BookingStatus, RejectReason, ServiceStatus
from spa_console.services.availability_service import (
    TOTAL_ROOMS,
    booking_interval,
    is_blocking,
    is_eligible_staff,
    overlaps,
    room_availability,
    staff_availability,
)
from spa_console.services.console_state import ConsoleState, Snapshot
from spa_console.services.time_grid import ALL_TIME_SLOTS, slot_index, to_minutes
from spa_console.utils.codes import next_sequential_code

logger = logging.getLogger(__name__)

UNASSIGNED_STAFF_NAME = "Не назначен"

# Предикат свободного окна: (день, начало, конец) -> свободно ли
SlotPredicate = Callable[[dt.date, int, int], bool]

# Кнопки быстрых действий в списке записей
QUICK_ACTIONS: Dict[BookingStatus, List[BookingStatus]] = {
    BookingStatus.PENDING: [BookingStatus.CONFIRMED, BookingStatus.CANCELLED],
    BookingStatus.CONFIRMED: [BookingStatus.IN_PROGRESS, BookingStatus.CANCELLED],
    BookingStatus.IN_PROGRESS: [BookingStatus.COMPLETED],
    BookingStatus.COMPLETED: [],
    BookingStatus.CANCELLED: [],
}


def quick_actions(status: BookingStatus) -> List[BookingStatus]:
    """Переходы, которые UI предлагает одной кнопкой. Не ограничивают update."""
    return list(QUICK_ACTIONS.get(status, []))


def resize_staff_slots(current: Sequence[str], required: int) -> List[str]:
    """Подгоняет список слотов сотрудников под требование услуги: обрезает или дополняет пустыми."""
    slots = list(current[:required])
    slots.extend([""] * (required - len(slots)))
    return slots


def next_booking_code(bookings: Iterable[Booking]) -> str:
    """Следующий код BK### по всем известным записям, а не только за день."""
    return next_sequential_code("BK", (b.code for b in bookings))


def find_next_available_slot(
    date: dt.date,
    from_time: str,
    duration: int,
    predicate: SlotPredicate
) -> Optional[str]:
    """
    Ближайший слот после from_time, для которого предикат истинен.

    Returns:
        Время слота или None, если до конца дня ничего не нашлось
        или from_time не лежит на сетке
    """
    start_index = slot_index(from_time)
    if start_index == -1:
        return None

    for slot in ALL_TIME_SLOTS[start_index + 1:]:
        start = to_minutes(slot)
        if predicate(date, start, start + duration):
            return slot
    return None


def room_predicate(
    bookings: Sequence[Booking],
    exclude_booking_id: Optional[str] = None,
    total_rooms: int = TOTAL_ROOMS
) -> SlotPredicate:
    """Уровень формы: в окне есть свободная комната."""
    def check(date: dt.date, start: int, end: int) -> bool:
        return room_availability(bookings, date, start, end, exclude_booking_id, total_rooms).available
    return check


def any_allocated_room_free_predicate(
    bookings_for_date: Sequence[Booking],
    allocation: Dict[str, Optional[int]],
    total_rooms: int = TOTAL_ROOMS
) -> SlotPredicate:
    """Уровень панели фильтров: хотя бы в одной комнате таймлайна нет занимающей записи."""
    def check(date: dt.date, start: int, end: int) -> bool:
        for room_index in range(total_rooms):
            busy = any(
                allocation.get(b.id) == room_index
                and b.date == date
                and is_blocking(b.status)
                and overlaps(start, end, *booking_interval(b))
                for b in bookings_for_date
            )
            if not busy:
                return True
        return False
    return check


def any_staff_free_predicate(bookings_for_date: Sequence[Booking], staff_ids: Sequence[str]) -> SlotPredicate:
    """Уровень панели фильтров: хотя бы один из сотрудников свободен."""
    def check(date: dt.date, start: int, end: int) -> bool:
        return any(
            staff_availability(bookings_for_date, staff_id, date, start, end).available
            for staff_id in staff_ids
        )
    return check


class BookingService:
    """
    Сервис для управления записями.
    Проверяет комнаты и сотрудников, сохраняет через хранилище
    и только после подтверждения обновляет состояние в памяти.
    """

    def __init__(
        self,
        booking_repository: BookingRepository,
        state: ConsoleState,
        total_rooms: Optional[int] = None,
        enforce_staff_conflicts: Optional[bool] = None
    ):
        """
        Args:
            booking_repository: Репозиторий записей (внешнее хранилище)
            state: Состояние консоли
            total_rooms: Количество комнат, по умолчанию из настроек
            enforce_staff_conflicts: Жесткая проверка занятости сотрудников, по умолчанию из настроек
        """
        self.booking_repository = booking_repository
        self.state = state
        self.total_rooms = settings.TOTAL_ROOMS if total_rooms is None else total_rooms
        self.enforce_staff_conflicts = (
            settings.ENFORCE_STAFF_CONFLICTS if enforce_staff_conflicts is None else enforce_staff_conflicts
        )

    def next_available_slot(
        self,
        date: dt.date,
        from_time: str,
        duration: int,
        exclude_booking_id: Optional[str] = None
    ) -> Optional[str]:
        """Ближайшее время после from_time, когда есть свободная комната."""
        bookings = self.state.snapshot().bookings
        predicate = room_predicate(bookings, exclude_booking_id, self.total_rooms)
        return find_next_available_slot(date, from_time, duration, predicate)

    def staff_slots_for_service(self, service_id: Optional[str], current: Sequence[str] = ()) -> List[str]:
        """Слоты выбора сотрудников после смены услуги в форме."""
        service = self.state.snapshot().find_service(service_id)
        if service is None:
            return []
        return resize_staff_slots(current, service.staff_count)

    def submit_booking(
        self,
        candidate: BookingCandidate,
        booking_id: Optional[str] = None,
        confirm_overbook: bool = False
    ) -> SubmissionResult:
        """
        Создает новую запись или сохраняет изменения существующей.

        Args:
            candidate: Данные формы
            booking_id: ID редактируемой записи, None для новой
            confirm_overbook: Пользователь подтвердил запись при занятых комнатах

        Returns:
            SubmissionResult: принятая запись или причина отказа
        """
        logger.info(
            f"📝 [SUBMIT BOOKING] {'Редактирование ' + booking_id if booking_id else 'Новая запись'}: "
            f"service={candidate.service_id}, date={candidate.date}, time={candidate.time}, "
            f"staff={candidate.staff_ids}"
        )
        snapshot = self.state.snapshot()

        existing = None
        if booking_id:
            existing = snapshot.find_booking(booking_id)
            if existing is None:
                logger.warning(f"❌ [SUBMIT BOOKING] Запись не найдена: id={booking_id}")
                return self._reject(RejectReason.NOT_FOUND, f"Запись {booking_id} не найдена")

        service = snapshot.find_service(candidate.service_id)
        if service is None:
            logger.warning(f"❌ [SUBMIT BOOKING] Услуга не выбрана: service_id={candidate.service_id}")
            return self._reject(RejectReason.NO_SERVICE, "Выберите услугу")

        # Остановленная услуга остается только у записей, где она уже выбрана
        service_changed = existing is None or existing.service_id != service.id
        if service.status == ServiceStatus.STOPPED and service_changed:
            logger.warning(f"❌ [SUBMIT BOOKING] Услуга остановлена: {service.code} {service.name}")
            return self._reject(RejectReason.NO_SERVICE, f"Услуга «{service.name}» больше не оказывается")

        duration = service.duration
        start = to_minutes(candidate.time)
        end = start + duration

        # Смена только статуса или данных клиента не должна упираться в собственную комнату
        schedule_changed = existing is None or (
            existing.date != candidate.date
            or existing.time != candidate.time
            or existing.duration != duration
        )

        if schedule_changed:
            rooms = room_availability(snapshot.bookings, candidate.date, start, end, booking_id, self.total_rooms)
            if not rooms.available:
                if not confirm_overbook:
                    next_time = self.next_available_slot(candidate.date, candidate.time, duration, booking_id)
                    logger.warning(
                        f"⚠️ [SUBMIT BOOKING] Все комнаты заняты: occupied={rooms.occupied_count}, "
                        f"ближайшее свободное время={next_time}"
                    )
                    return SubmissionResult(
                        accepted=False,
                        reason=RejectReason.ROOM_FULL,
                        message=f"Все комнаты заняты в {candidate.time}. Сохранить запись все равно?",
                        requires_confirmation=True,
                        next_available_time=next_time,
                    )
                logger.info(f"⚠️ [SUBMIT BOOKING] Сверхлимит комнат подтвержден пользователем: {candidate.time}")

        valid_staff_ids = self._valid_staff_ids(snapshot, candidate.staff_ids, existing)
        if len(valid_staff_ids) < service.staff_count:
            logger.warning(
                f"❌ [SUBMIT BOOKING] Недостаточно сотрудников: выбрано={len(valid_staff_ids)}, "
                f"требуется={service.staff_count}"
            )
            return self._reject(
                RejectReason.NOT_ENOUGH_STAFF,
                f"Для услуги требуется сотрудников: {service.staff_count}. Выберите всех сотрудников."
            )

        if self.enforce_staff_conflicts:
            staff_changed = existing is None or existing.staff_ids != valid_staff_ids
            if schedule_changed or staff_changed:
                conflict = self._find_staff_conflict(snapshot, valid_staff_ids, candidate.date, start, end, booking_id)
                if conflict is not None:
                    return conflict

        discount = candidate.discount or 0
        draft = Booking(
            id=booking_id or "",
            code=existing.code if existing else next_booking_code(snapshot.bookings),
            customer_name=candidate.customer_name,
            customer_phone=candidate.customer_phone,
            service_id=service.id,
            service_name=service.name,
            staff_ids=valid_staff_ids,
            staff_name=self._staff_display_name(snapshot, valid_staff_ids),
            date=candidate.date,
            time=candidate.time,
            duration=duration,
            status=candidate.status,
            notes=candidate.notes,
            total_amount=max(0, service.price - discount),
            discount=discount,
        )
        fields = BookingRepository.to_record_fields(draft)

        try:
            if existing:
                persisted = self.booking_repository.update_booking(booking_id, fields)
            else:
                persisted = self.booking_repository.create_booking(fields)
        except RecordStoreError as e:
            log_error(logger, e, f"Сохранение записи {draft.code}")
            return self._reject(RejectReason.STORE_FAILURE, str(e))

        if existing:
            self.state.commit_booking_updated(persisted)
        else:
            self.state.commit_booking_created(persisted)

        logger.info(
            f"✅ [SUBMIT BOOKING] Запись сохранена: id={persisted.id}, code={persisted.code}, "
            f"{persisted.date} {persisted.time} ({persisted.duration} мин), сумма={persisted.total_amount}"
        )
        return SubmissionResult(accepted=True, booking=persisted)

    def update_status(self, booking_id: str, status: BookingStatus) -> SubmissionResult:
        """
        Быстрая смена статуса. Любой статус допустим из любого,
        комнаты и сотрудники повторно не проверяются.
        """
        existing = self.state.snapshot().find_booking(booking_id)
        if existing is None:
            return self._reject(RejectReason.NOT_FOUND, f"Запись {booking_id} не найдена")

        try:
            persisted = self.booking_repository.update_booking(booking_id, {'status': status.value})
        except RecordStoreError as e:
            log_error(logger, e, f"Смена статуса записи {existing.code}")
            return self._reject(RejectReason.STORE_FAILURE, str(e))

        self.state.commit_booking_updated(persisted)
        logger.info(f"🔄 [STATUS] {existing.code}: {existing.status.value} -> {status.value}")
        return SubmissionResult(accepted=True, booking=persisted)

    def _find_staff_conflict(
        self,
        snapshot: Snapshot,
        staff_ids: Sequence[str],
        date: dt.date,
        start: int,
        end: int,
        booking_id: Optional[str]
    ) -> Optional[SubmissionResult]:
        for staff_id in staff_ids:
            availability = staff_availability(snapshot.bookings, staff_id, date, start, end, booking_id)
            if not availability.available:
                employee = snapshot.find_employee(staff_id)
                name = employee.name if employee else staff_id
                logger.warning(
                    f"❌ [SUBMIT BOOKING] Сотрудник занят: staff={name}, до {availability.conflict_end_time}"
                )
                return self._reject(
                    RejectReason.STAFF_CONFLICT,
                    f"Сотрудник {name} занят до {availability.conflict_end_time}"
                )
        return None

    @staticmethod
    def _valid_staff_ids(
        snapshot: Snapshot,
        staff_ids: Sequence[str],
        existing: Optional[Booking],
    ) -> List[str]:
        """
        Оставляет известных работающих техников без повторов.
        Сотрудник, уже назначенный на редактируемую запись, сохраняется,
        даже если с тех пор ушел в отпуск.
        """
        kept = set(existing.staff_ids) if existing else set()
        valid = []
        for staff_id in staff_ids:
            if not staff_id or not staff_id.strip() or staff_id in valid:
                continue
            employee = snapshot.find_employee(staff_id)
            if employee is None:
                logger.warning(f"⚠️ [SUBMIT BOOKING] Неизвестный сотрудник пропущен: {staff_id}")
                continue
            if not is_eligible_staff(employee) and staff_id not in kept:
                logger.warning(f"⚠️ [SUBMIT BOOKING] Сотрудник не может быть назначен: {employee.name}")
                continue
            valid.append(staff_id)
        return valid

    @staticmethod
    def _staff_display_name(snapshot: Snapshot, staff_ids: Sequence[str]) -> str:
        names = []
        for staff_id in staff_ids:
            employee = snapshot.find_employee(staff_id)
            if employee:
                names.append(employee.name)
        return ", ".join(names) if names else UNASSIGNED_STAFF_NAME

    @staticmethod
    def _reject(reason: RejectReason, message: str) -> SubmissionResult:
        return SubmissionResult(accepted=False, reason=reason, message=message)

