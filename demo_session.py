"""
Demo session walking the store end to end.

This script exercises:
1. Configuration loading and validation
2. Demo profile seeding (and that reseeding changes nothing)
3. The medication lifecycle for a regular user
4. Owner isolation between two users
5. Error handling for unknown endpoints and missing entities

Run with: uv run python demo_session.py
Set STORAGE_URL=sqlite:///./demo.db to keep the data between runs.
"""

import asyncio

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from healthstore.api import HealthStoreClient, create_client
from healthstore.config import AppConfig, StorageConfig, get_config, print_config_summary
from healthstore.domain.models import Medication, MedicationStatus
from healthstore.services import HttpVerb, MemoryBackingStore, SimulatedRequest

console = Console()


def session_config() -> AppConfig:
    """Environment config, with an in-memory store and no latency unless overridden."""
    config = get_config()
    if config.storage.url.startswith("sqlite:///./healthstore.db"):
        storage = StorageConfig(url="memory://", latency_seconds=0.0)
        config = config.model_copy(update={"storage": storage})
    return config


async def step_configuration() -> bool:
    console.print(Panel("⚙️  Configuration", style="blue"))
    try:
        get_config()
        print_config_summary()
        return True
    except Exception as e:
        console.print(f"❌ Configuration failed: {e}", style="red")
        return False


async def step_seeding(client: HealthStoreClient) -> bool:
    console.print(Panel("🌱 Seeding Demo Profile", style="blue"))

    first = client.seed_demo_profile()
    second = client.seed_demo_profile()

    table = Table(title="Seeded Collections")
    table.add_column("Collection", style="cyan")
    table.add_column("Records", style="green")
    for key, count in first.items():
        table.add_row(key, str(count))
    console.print(table)

    if first != second:
        console.print("❌ Reseeding changed the collections", style="red")
        return False
    console.print("✅ Reseeding left every collection untouched", style="green")
    return True


async def step_medication_lifecycle(client: HealthStoreClient) -> bool:
    console.print(Panel("💊 Medication Lifecycle", style="blue"))

    created = await client.medications.create(
        Medication(
            name="Metformin", dosage="500mg", frequency="twice daily", times=["08:00", "20:00"]
        )
    )
    if created.is_err():
        console.print(f"❌ Create failed: {created.unwrap_err()}", style="red")
        return False
    medication = created.unwrap()
    console.print(f"Created {medication.name} as {medication.id}")

    listed = (await client.medications.list()).unwrap_or([])
    console.print(f"{client.caller_id} now has {len(listed)} medication(s)")

    updated = await client.medications.update(
        medication.id or "", {"status": MedicationStatus.DISCONTINUED.value}
    )
    if updated.is_err():
        console.print(f"❌ Update failed: {updated.unwrap_err()}", style="red")
        return False
    after = updated.unwrap()
    console.print(
        f"Status {after.status.value if after.status else None}, "
        f"createdAt unchanged: {after.created_at == medication.created_at}"
    )

    await client.medications.delete(medication.id or "")
    remaining = (await client.medications.list()).unwrap_or([])
    console.print(f"After delete: {len(remaining)} medication(s)")

    if remaining:
        console.print("❌ Medication survived deletion", style="red")
        return False
    console.print("✅ Create, update and delete behaved as expected", style="green")
    return True


async def step_owner_isolation(config: AppConfig, store: MemoryBackingStore | None) -> bool:
    console.print(Panel("🔒 Owner Isolation", style="blue"))

    alice = create_client("u-alice", config, store)
    bob = create_client("u-bob", config, store)
    await alice.appointments.create(
        {"doctorName": "Dr. Rao", "dateTime": "2024-03-01T10:00:00+00:00"}
    )

    alice_sees = len((await alice.appointments.list()).unwrap_or([]))
    bob_sees = len((await bob.appointments.list()).unwrap_or([]))

    table = Table(title="Visible Appointments")
    table.add_column("Caller", style="cyan")
    table.add_column("Count", style="white")
    table.add_row("u-alice", str(alice_sees))
    table.add_row("u-bob", str(bob_sees))
    console.print(table)

    if alice_sees == 0 or bob_sees != 0:
        console.print("❌ Records leaked between users", style="red")
        return False
    console.print("✅ Users only see their own records", style="green")
    return True


async def step_error_handling(client: HealthStoreClient) -> bool:
    console.print(Panel("🛡️ Error Handling", style="blue"))

    unknown = client.dispatcher.dispatch(
        SimulatedRequest(path="/unknown", verb=HttpVerb.GET, caller_id=client.caller_id)
    )
    missing = await client.prescriptions.get("does-not-exist")

    for label, result in (("Unknown endpoint", unknown), ("Missing entity", missing)):
        if result.is_ok():
            console.print(f"❌ {label} unexpectedly succeeded", style="red")
            return False
        console.print(f"{label}: {result.unwrap_err().to_payload()}", style="yellow")

    console.print("✅ Failures came back as values", style="green")
    return True


async def run_session() -> None:
    console.print(Panel("🏥 Family Health Store - Demo Session", style="bold blue"))

    config = session_config()
    store = MemoryBackingStore() if config.storage.url == "memory://" else None
    demo_client = create_client(config.demo.demo_owner_id, config, store)
    user_client = create_client("u1", config, store)

    steps = [
        ("Configuration", step_configuration()),
        ("Seeding", step_seeding(demo_client)),
        ("Medication Lifecycle", step_medication_lifecycle(user_client)),
        ("Owner Isolation", step_owner_isolation(config, store)),
        ("Error Handling", step_error_handling(user_client)),
    ]

    results = []
    for name, step in steps:
        console.print(f"\n{'=' * 60}")
        try:
            results.append((name, await step))
        except Exception as e:
            console.print(f"❌ {name} failed with exception: {e}", style="red")
            results.append((name, False))

    console.print(f"\n{'=' * 60}")
    summary = Table(title="Session Summary")
    summary.add_column("Step", style="cyan")
    summary.add_column("Result", style="white")
    for name, ok in results:
        summary.add_row(name, "✅ PASSED" if ok else "❌ FAILED")
    console.print(summary)


if __name__ == "__main__":
    try:
        asyncio.run(run_session())
    except KeyboardInterrupt:
        console.print("\n👋 Session stopped by user", style="yellow")
