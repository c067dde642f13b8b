#!/usr/bin/env python3
"""
Basic Usage Example - Toy Robot Command Service

This script drives the command service in-process against an in-memory
store. It shows how to:
- Wire the store and the command service
- Place, move and turn the robot
- See rejected commands leave the robot where it was
- Read back the report and the action history

Run: python examples/basic_usage.py
"""

from toy_robot.client.render import render_grid
from toy_robot.engine import RobotCommandService
from toy_robot.errors import RobotDomainError
from toy_robot.persistence.robot_store import RobotStore


def run_step(service: RobotCommandService, label: str, command) -> None:
    """Run one command and print the outcome."""
    print(f"   {label}")
    try:
        command()
        print("   -> accepted")
    except RobotDomainError as e:
        print(f"   -> rejected: {e.message}")

    print(render_grid(service.current_state()))
    print()


def main():
    print("🤖 Toy Robot - Basic Usage Example")
    print("=" * 50)
    print()

    print("1. Wiring an in-memory store and the command service...")
    store = RobotStore(":memory:")
    service = RobotCommandService(store)
    print("   ✓ Service ready")
    print()

    print("2. Commands before PLACE are rejected...")
    run_step(service, "MOVE", service.move)

    print("3. Classic sequence: PLACE 1,2,EAST -> MOVE -> MOVE -> LEFT -> MOVE")
    run_step(service, "PLACE 1,2,EAST", lambda: service.place(1, 2, "EAST"))
    run_step(service, "MOVE", service.move)
    run_step(service, "MOVE", service.move)
    run_step(service, "LEFT", service.turn_left)
    run_step(service, "MOVE", service.move)
    print(f"   REPORT: {service.report()}")
    print()

    print("4. Walking into the edge of the table...")
    run_step(service, "PLACE 0,0,SOUTH", lambda: service.place(0, 0, "SOUTH"))
    run_step(service, "MOVE (would fall off)", service.move)
    print(f"   REPORT: {service.report()}")
    print()

    print("5. History, newest first:")
    for entry in service.history():
        print(f"   {entry.action.value:<5} {entry.position.x},{entry.position.y},{entry.direction.value}")
    print()

    stats = store.get_stats()
    print(f"   Snapshots stored: {stats['total_snapshots']}")
    print(f"   History rows    : {stats['total_history']}")
    print()
    print("✅ Demo completed successfully!")


if __name__ == "__main__":
    main()
