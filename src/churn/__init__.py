"""Continuous file churn.

This module clones plants from seeds and mutates their files with
randomized read/write I/O from uncoordinated worker threads.
"""
