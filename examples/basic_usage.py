"""Basic usage example for fieldstore."""

import asyncio

from fieldstore import (
    EventLog,
    FieldAlreadyExists,
    HashManager,
    InvalidNumericValue,
    MemoryStore,
    NoSuchKey,
)
from fieldstore.logging import configure_logging


async def main() -> None:
    """Run basic usage examples."""
    configure_logging("info")
    print("=== fieldstore - Basic Usage Example ===\n")

    events = EventLog()
    events.subscribe(lambda event: print(f"  event: {event.name} {event.args}"))
    hashes = HashManager(MemoryStore(), events=events)

    # ===== Fields =====
    print("Hash fields:")
    await hashes.hset("user:1", "name", "Alice")
    await hashes.hmset("user:1", {"email": "alice@example.com", "visits": "0"})
    print(f"  name: {await hashes.hget('user:1', 'name')}")
    print(f"  fields: {await hashes.hkeys('user:1')}")

    try:
        await hashes.hsetnx("user:1", "email", "other@example.com")
    except FieldAlreadyExists as e:
        print(f"  hsetnx refused: {e}")

    # ===== Counters =====
    print("\nCounters:")
    for _ in range(3):
        await hashes.hincr("user:1", "visits")
    print(f"  visits: {await hashes.hget('user:1', 'visits')}")

    try:
        await hashes.hincr("user:1", "name")
    except InvalidNumericValue as e:
        print(f"  hincr refused: {e}")

    # ===== Callbacks =====
    print("\nCallbacks:")

    def on_done(error, *result):
        print(f"  callback: error={error!r} result={result}")

    await hashes.hdel("user:1", "email", callback=on_done)

    try:
        await hashes.hgetall("user:2", callback=on_done)
    except NoSuchKey:
        pass
    print(f"  hlen of missing key: {await hashes.hlen('user:2')}")

    print(f"\nFinal hash: {await hashes.hgetall('user:1')}")


if __name__ == "__main__":
    asyncio.run(main())
