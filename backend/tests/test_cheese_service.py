"""
Cheese Catalog Backend — Cheese Service Unit Tests
====================================================

What:  CheeseService semantics: decoration, the no-content signal, no-upsert
       updates, image preservation, delete true/false.
How:   Most tests use the AsyncMock store; a few run on the SQLite-backed
       service to check behaviour across real save/find calls.
"""

import base64

import pytest

from cheese_api.exceptions import DatabaseError
from cheese_api.models.cheese import Cheese, CheeseColor
from cheese_api.schemas.cheese import CheeseRequest
from cheese_api.services.cheese_service import CheeseService
from cheese_api.services.image_service import ImageUpload


def stored_cheese(cheese_id: int = 1, name: str = "Feta", blob: bytes = b"image data") -> Cheese:
    return Cheese(
        id=cheese_id,
        name=name,
        price=10.99,
        color=CheeseColor.YELLOW,
        image_name="cheddar.jpg",
        image_type="image/jpeg",
        image_blob=blob,
    )


def feta_request(**overrides) -> CheeseRequest:
    fields = {"name": "Feta", "price": 10.99, "color": "YELLOW"}
    fields.update(overrides)
    return CheeseRequest.model_validate(fields)


JPEG = ImageUpload(filename="cheddar.jpg", content_type="image/jpeg", data=b"image data")


class TestSaveCheese:

    @pytest.mark.asyncio
    async def test_sets_image_fields_before_single_save(self, mock_store):
        async def assign_id(cheese):
            cheese.id = 7
            return cheese
        mock_store.save.side_effect = assign_id

        result = await CheeseService(mock_store).save_cheese(feta_request(color="yellow"), JPEG)

        mock_store.save.assert_awaited_once()
        saved = mock_store.save.await_args.args[0]
        assert saved.image_name == "cheddar.jpg"
        assert saved.image_type == "image/jpeg"
        assert saved.image_blob == b"image data"
        assert saved.color is CheeseColor.YELLOW
        assert result.id == 7

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, mock_store):
        mock_store.save.side_effect = DatabaseError()

        with pytest.raises(DatabaseError):
            await CheeseService(mock_store).save_cheese(feta_request(), JPEG)


class TestGetAllCheeses:

    @pytest.mark.asyncio
    async def test_empty_store_returns_no_content_signal(self, mock_store):
        mock_store.find_all.return_value = []

        assert await CheeseService(mock_store).get_all_cheeses() is None

    @pytest.mark.asyncio
    async def test_every_entry_is_decorated(self, mock_store):
        mock_store.find_all.return_value = [
            stored_cheese(1, "Feta", b"one"),
            stored_cheese(2, "Parmesan", b"two"),
        ]

        cheeses = await CheeseService(mock_store).get_all_cheeses()

        assert [c.name for c in cheeses] == ["Feta", "Parmesan"]
        assert cheeses[0].image_data == "data:image/jpeg;base64," + base64.b64encode(b"one").decode()
        assert cheeses[1].image_data == "data:image/jpeg;base64," + base64.b64encode(b"two").decode()


class TestGetOneCheese:

    @pytest.mark.asyncio
    async def test_found_is_decorated(self, mock_store):
        mock_store.find_by_id.return_value = stored_cheese()

        cheese = await CheeseService(mock_store).get_one_cheese(1)

        assert cheese.id == 1
        assert cheese.image_data == "data:image/jpeg;base64," + base64.b64encode(b"image data").decode()

    @pytest.mark.asyncio
    async def test_missing_returns_none(self, mock_store):
        assert await CheeseService(mock_store).get_one_cheese(42) is None
        mock_store.find_by_id.assert_awaited_once_with(42)


class TestUpdateOneCheese:

    @pytest.mark.asyncio
    async def test_missing_id_returns_none_without_saving(self, mock_store):
        result = await CheeseService(mock_store).update_one_cheese(5, feta_request(), JPEG)

        assert result is None
        mock_store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_without_image_keeps_stored_image(self, mock_store):
        mock_store.find_by_id.return_value = stored_cheese(blob=b"original")
        mock_store.save.side_effect = lambda cheese: cheese

        result = await CheeseService(mock_store).update_one_cheese(
            1, feta_request(name="Brie", price=4.5, color="white")
        )

        saved = mock_store.save.await_args.args[0]
        assert (saved.name, saved.price, saved.color) == ("Brie", 4.5, CheeseColor.WHITE)
        assert saved.image_blob == b"original"
        assert saved.image_name == "cheddar.jpg"
        assert saved.image_type == "image/jpeg"
        assert result.name == "Brie"

    @pytest.mark.asyncio
    async def test_with_image_replaces_image_fields(self, mock_store):
        mock_store.find_by_id.return_value = stored_cheese(blob=b"original")
        mock_store.save.side_effect = lambda cheese: cheese
        png = ImageUpload(filename="brie.png", content_type="image/png", data=b"png bytes")

        result = await CheeseService(mock_store).update_one_cheese(1, feta_request(), png)

        saved = mock_store.save.await_args.args[0]
        assert saved.image_blob == b"png bytes"
        assert saved.image_name == "brie.png"
        assert result.image_data.startswith("data:image/png;base64,")

    @pytest.mark.asyncio
    async def test_empty_name_is_written_as_is(self, mock_store):
        mock_store.find_by_id.return_value = stored_cheese()
        mock_store.save.side_effect = lambda cheese: cheese

        await CheeseService(mock_store).update_one_cheese(1, feta_request(name=""))

        assert mock_store.save.await_args.args[0].name == ""


class TestDeleteOneCheese:

    @pytest.mark.asyncio
    async def test_missing_returns_false_and_deletes_nothing(self, mock_store):
        mock_store.exists_by_id.return_value = False

        assert await CheeseService(mock_store).delete_one_cheese(3) is False
        mock_store.delete_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_existing_returns_true(self, mock_store):
        mock_store.exists_by_id.return_value = True

        assert await CheeseService(mock_store).delete_one_cheese(3) is True
        mock_store.delete_by_id.assert_awaited_once_with(3)


class TestServiceOnDatabase:

    @pytest.mark.asyncio
    async def test_created_cheese_reads_back_with_data_uri(self, cheese_service):
        created = await cheese_service.save_cheese(feta_request(), JPEG)

        fetched = await cheese_service.get_one_cheese(created.id)

        assert fetched.image_data == (
            "data:image/jpeg;base64," + base64.b64encode(b"image data").decode()
        )

    @pytest.mark.asyncio
    async def test_update_does_not_upsert(self, cheese_service):
        assert await cheese_service.update_one_cheese(123, feta_request()) is None
        assert await cheese_service.get_all_cheeses() is None

    @pytest.mark.asyncio
    async def test_delete_then_get_is_absent(self, cheese_service):
        created = await cheese_service.save_cheese(feta_request(), JPEG)

        assert await cheese_service.delete_one_cheese(created.id) is True
        assert await cheese_service.get_one_cheese(created.id) is None
        assert await cheese_service.delete_one_cheese(created.id) is False
