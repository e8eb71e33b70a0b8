import pytest

from gameserve.services.fetcher import FileFetcher, SpaFallbackController
from gameserve.utils.exceptions import StorageError

PREFIX = "user-1/space-run/v1"


@pytest.mark.asyncio
async def test_hit_on_requested_file(storage, bucket):
    bucket.put(f"{PREFIX}/app.js", "console.log('hi')")
    controller = SpaFallbackController(FileFetcher(storage))

    fetched = await controller.run(PREFIX, "app.js", "index.html")

    assert fetched.path == "app.js"
    assert fetched.body == b"console.log('hi')"
    assert not fetched.fell_back
    assert controller.attempts == ["app.js"]


@pytest.mark.asyncio
async def test_miss_falls_back_to_entrypoint_once(storage, bucket):
    bucket.put(f"{PREFIX}/index.html", "<html></html>")
    controller = SpaFallbackController(FileFetcher(storage))

    fetched = await controller.run(PREFIX, "levels/3", "index.html")

    assert fetched.path == "index.html"
    assert fetched.fell_back
    assert controller.attempts == ["levels/3", "index.html"]


@pytest.mark.asyncio
async def test_missing_file_and_entrypoint_stops_after_two_reads(storage, bucket):
    controller = SpaFallbackController(FileFetcher(storage))

    assert await controller.run(PREFIX, "missing.js", "index.html") is None
    assert controller.attempts == ["missing.js", "index.html"]
    assert bucket.requests == [f"{PREFIX}/missing.js", f"{PREFIX}/index.html"]


@pytest.mark.asyncio
async def test_missing_entrypoint_is_not_retried(storage, bucket):
    controller = SpaFallbackController(FileFetcher(storage))

    assert await controller.run(PREFIX, "index.html", "index.html") is None
    assert bucket.requests == [f"{PREFIX}/index.html"]


@pytest.mark.asyncio
async def test_storage_failure_is_not_masked_by_fallback(storage, bucket):
    bucket.put(f"{PREFIX}/index.html", "<html></html>")
    bucket.status_overrides[f"{PREFIX}/app.js"] = 503
    controller = SpaFallbackController(FileFetcher(storage))

    with pytest.raises(StorageError):
        await controller.run(PREFIX, "app.js", "index.html")
    assert bucket.requests == [f"{PREFIX}/app.js"]


@pytest.mark.asyncio
async def test_fetch_returns_none_only_for_missing_objects(storage, bucket):
    fetcher = FileFetcher(storage)
    assert await fetcher.fetch(PREFIX, "nope.png") is None

    bucket.unreachable.add(f"{PREFIX}/down.png")
    with pytest.raises(StorageError):
        await fetcher.fetch(PREFIX, "down.png")
