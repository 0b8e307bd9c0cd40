from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campusconnect.database import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Base CRUD class with generic create, read, update and delete

    ``field_map`` translates camelCase schema fields into model columns;
    schema fields missing from it are never written.
    """

    field_map: Dict[str, str] = {}

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def to_columns(self, obj_in: Union[BaseModel, Dict[str, Any]], *, exclude_unset: bool = False) -> Dict[str, Any]:
        """Map a schema (or a dict of schema fields) onto model column names"""
        if isinstance(obj_in, dict):
            data = obj_in
        else:
            data = obj_in.model_dump(exclude_unset=exclude_unset)
        columns = {}
        for field, value in data.items():
            column = self.field_map.get(field)
            if column is None:
                continue
            if hasattr(value, "value"):
                value = value.value
            columns[column] = value
        return columns

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """
        Fetch one record by ID
        """
        query = select(self.model).where(self.model.id == id)
        result = await db.execute(query)
        return result.scalars().first()

    async def get_all(self, db: AsyncSession) -> List[ModelType]:
        """
        Fetch every record ordered by ID
        """
        query = select(self.model).order_by(self.model.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def create(self, db: AsyncSession, *, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a record from a dict of column values
        """
        db_obj = self.model(**obj_in)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        """
        Merge the supplied fields onto an existing record, leaving the rest unchanged
        """
        update_data = self.to_columns(obj_in, exclude_unset=True)
        for column, value in update_data.items():
            setattr(db_obj, column, value)
        db.add(db_obj)
        await db.commit()
        await db.refresh(db_obj)
        return db_obj

    async def update_by_id(
        self,
        db: AsyncSession,
        *,
        id: Any,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> Optional[ModelType]:
        """
        Partial update by ID; returns None when the record does not exist
        """
        db_obj = await self.get(db, id)
        if db_obj is None:
            return None
        return await self.update(db, db_obj=db_obj, obj_in=obj_in)

    async def remove(self, db: AsyncSession, *, id: Any) -> bool:
        """
        Delete a record; returns whether it existed
        """
        obj = await self.get(db, id)
        if obj is None:
            return False
        await db.delete(obj)
        await db.commit()
        return True
