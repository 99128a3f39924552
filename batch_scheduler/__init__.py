"""
Batch scheduler package.

Simulates FCFS, Round Robin and both flavours of Shortest Job First over a
fixed batch of tasks, reporting the execution timeline and waiting times.
"""

__all__ = ["cli"]
