"""
Test fixtures package for merkle_commit tests.

- leaves.py: leaf factories and the hand-built reference root
"""
