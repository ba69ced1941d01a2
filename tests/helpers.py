import asyncio

TRUNK = "A" * 81
BRANCH = "B" * 81


async def settle(rounds: int = 5) -> None:
    """Deja correr al resto de tareas pendientes del loop."""
    for _ in range(rounds):
        await asyncio.sleep(0)
