"""
Toy Robot - Grid Robot Simulation Service

A small stateful service that simulates a toy robot moving on a 5x5 table.
Accepts PLACE/MOVE/LEFT/RIGHT/REPORT commands over HTTP, rejects moves that
would drop the robot off the table, and keeps an audit history of every
accepted action.
"""

__version__ = "0.1.0"
__author__ = "Toy Robot Team"
