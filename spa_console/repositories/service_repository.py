"""
Репозиторий для работы с услугами
"""

from typing import Any, Dict, List, Optional

from cachetools import TTLCache
from sqlalchemy.orm import Session

from spa_console.models.service import ServiceRecord
from spa_console.schemas.enums import ServiceCategory, ServiceStatus
from spa_console.schemas.service import Service
from .base import BaseRepository

# Кэш для списка услуг, живет 10 минут (600 секунд)
services_cache = TTLCache(maxsize=8, ttl=600)


class ServiceRepository(BaseRepository[ServiceRecord]):
    """Репозиторий для работы с услугами"""

    def __init__(self, session: Session):
        super().__init__(ServiceRecord, session)

    def _cache_key(self) -> str:
        return str(self.db.get_bind().url)

    def list_services(self) -> List[Service]:
        """Получает все услуги с кэшированием"""
        key = self._cache_key()
        if key in services_cache:
            return services_cache[key]

        services = [self.to_domain(record) for record in self.get_all()]
        services_cache[key] = services
        return services

    def clear_cache(self) -> None:
        """Очищает кэш услуг"""
        services_cache.clear()

    def get_service(self, service_id: str) -> Optional[Service]:
        record = self.get_by_id(service_id)
        return self.to_domain(record) if record else None

    def create_service(self, fields: Dict[str, Any]) -> Service:
        """Создает новую услугу и очищает кэш"""
        service = self.to_domain(self.create(fields))
        self.clear_cache()
        return service

    def update_service(self, service_id: str, fields: Dict[str, Any]) -> Optional[Service]:
        """Обновляет услугу и очищает кэш"""
        record = self.update(service_id, fields)
        self.clear_cache()
        return self.to_domain(record) if record else None

    def delete_service(self, service_id: str) -> bool:
        """Удаляет услугу и очищает кэш"""
        deleted = self.delete(service_id)
        self.clear_cache()
        return deleted

    @staticmethod
    def to_domain(record: ServiceRecord) -> Service:
        """Конвертирует строку хранилища в доменный объект"""
        return Service(
            id=record.id,
            code=record.code,
            name=record.name,
            image=record.image or "",
            category=ServiceCategory(record.category),
            duration=record.duration,
            price=record.price,
            staff_count=record.staff_count,
            status=ServiceStatus(record.status),
            description=record.description or "",
        )
