"""
Базовый репозиторий для работы с хранилищем записей
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from spa_console.core.database import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class RecordStoreError(Exception):
    """Хранилище отклонило операцию чтения или записи."""


class BaseRepository(Generic[ModelType]):
    """Базовый репозиторий: список, создание, обновление, фильтр по равенству"""

    def __init__(self, model: Type[ModelType], session: Session):
        self.model = model
        self.db = session

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    def get_by_id(self, id: Any) -> Optional[ModelType]:
        """Получает запись по ID"""
        return self.db.get(self.model, id)

    def get_all(self) -> List[ModelType]:
        """Получает все записи таблицы"""
        try:
            return list(self.db.scalars(select(self.model)))
        except SQLAlchemyError as e:
            raise RecordStoreError(f"Не удалось прочитать {self.table_name}: {e}") from e

    def filter_by(self, **conditions: Any) -> List[ModelType]:
        """Получает записи, у которых поля равны указанным значениям"""
        try:
            return list(self.db.scalars(select(self.model).filter_by(**conditions)))
        except SQLAlchemyError as e:
            raise RecordStoreError(f"Не удалось прочитать {self.table_name}: {e}") from e

    def create(self, data: Dict[str, Any]) -> ModelType:
        """Создает новую запись и возвращает ее с присвоенным ID"""
        record = self.model(**data)
        try:
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ [STORE] Ошибка создания записи в {self.table_name}: {e}")
            raise RecordStoreError(f"Ошибка создания записи: {e}") from e
        return record

    def update(self, id: Any, data: Dict[str, Any]) -> Optional[ModelType]:
        """Обновляет запись; None, если записи с таким ID нет"""
        record = self.get_by_id(id)
        if record is None:
            return None

        try:
            for key, value in data.items():
                setattr(record, key, value)
            self.db.commit()
            self.db.refresh(record)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ [STORE] Ошибка обновления записи {id} в {self.table_name}: {e}")
            raise RecordStoreError(f"Ошибка обновления записи: {e}") from e
        return record

    def delete(self, id: Any) -> bool:
        """Удаляет запись по ID"""
        record = self.get_by_id(id)
        if record is None:
            return False

        try:
            self.db.delete(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ [STORE] Ошибка удаления записи {id} из {self.table_name}: {e}")
            raise RecordStoreError(f"Ошибка удаления записи: {e}") from e
        return True
