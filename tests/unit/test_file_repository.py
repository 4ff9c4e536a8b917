"""
Unit tests for FileRepository.
"""

import uuid
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.domains.file.repository import FileRepository
from app.exceptions.base import NotFoundError, PersistenceError
from app.exceptions.file import FileRecordNotFoundError
from models.file import FileRecord


def make_record(user_id, name="stored.txt", size=3, folder_id=None):
    return FileRecord(
        user_id=user_id,
        folder_id=folder_id,
        stored_name=name,
        stored_path=f"/uploads/{name}",
        content_type="text/plain",
        size=size,
    )


class TestFileRepository:
    """Test cases for FileRepository."""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_timestamp(self, test_db, test_user):
        repository = FileRepository(test_db)

        record = await repository.create(make_record(test_user.id))

        assert record.id is not None
        assert record.uploaded_at is not None
        assert record.user_id == test_user.id

    @pytest.mark.asyncio
    async def test_create_duplicate_stored_name(self, test_db, test_user):
        """Test that a constraint violation surfaces as PersistenceError."""
        repository = FileRepository(test_db)
        await repository.create(make_record(test_user.id, name="same.txt"))

        with pytest.raises(PersistenceError, match="Failed to store file metadata"):
            await repository.create(make_record(test_user.id, name="same.txt"))

    @pytest.mark.asyncio
    async def test_create_database_error_rolls_back(self, test_db, test_user):
        repository = FileRepository(test_db)

        with patch.object(test_db, "commit", side_effect=SQLAlchemyError("db down")):
            with patch.object(test_db, "rollback") as mock_rollback:
                with pytest.raises(PersistenceError, match="db down"):
                    await repository.create(make_record(test_user.id))

                mock_rollback.assert_called_once()

    @pytest.mark.asyncio
    async def test_find_by_id(self, test_db, test_user):
        repository = FileRepository(test_db)
        created = await repository.create(make_record(test_user.id))

        found = await repository.find_by_id(created.id)

        assert found.id == created.id
        assert found.stored_name == "stored.txt"

    @pytest.mark.asyncio
    async def test_find_by_id_missing(self, test_db):
        repository = FileRepository(test_db)

        with pytest.raises(FileRecordNotFoundError) as exc_info:
            await repository.find_by_id(uuid.uuid4())

        assert isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_list_by_owner_only_returns_owned_rows(self, test_db, test_user, test_user_2):
        repository = FileRepository(test_db)
        mine = [
            await repository.create(make_record(test_user.id, name=f"mine-{i}.txt"))
            for i in range(3)
        ]
        await repository.create(make_record(test_user_2.id, name="theirs.txt"))

        result = await repository.list_by_owner(test_user.id)

        assert {record.id for record in result} == {record.id for record in mine}

    @pytest.mark.asyncio
    async def test_list_by_owner_empty(self, test_db, test_user):
        repository = FileRepository(test_db)

        assert await repository.list_by_owner(test_user.id) == []

    @pytest.mark.asyncio
    async def test_list_all(self, test_db, test_user, test_user_2):
        repository = FileRepository(test_db)
        await repository.create(make_record(test_user.id, name="a.txt"))
        await repository.create(make_record(test_user_2.id, name="b.txt"))

        result = await repository.list_all()

        assert sorted(record.stored_name for record in result) == ["a.txt", "b.txt"]

    @pytest.mark.asyncio
    async def test_delete(self, test_db, test_user):
        repository = FileRepository(test_db)
        created = await repository.create(make_record(test_user.id))

        await repository.delete(created.id)

        with pytest.raises(FileRecordNotFoundError):
            await repository.find_by_id(created.id)

    @pytest.mark.asyncio
    async def test_delete_database_error(self, test_db, test_user):
        repository = FileRepository(test_db)
        created = await repository.create(make_record(test_user.id))
        created_id = created.id

        with patch.object(test_db, "execute", side_effect=SQLAlchemyError("locked")):
            with pytest.raises(PersistenceError, match="Failed to delete file metadata"):
                await repository.delete(created_id)

        assert (await repository.find_by_id(created_id)).id == created_id
