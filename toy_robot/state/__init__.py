"""
Robot state engine module.

Immutable robot state models and the pure transition functions implementing
PLACE, MOVE, LEFT, RIGHT and REPORT on the 5x5 table.
"""
