"""Per-project posting locks

Single-writer funnel for postings that touch a project's approved spend.
Holding the project's lock across read-sum, insert and commit linearizes
postings on one project inside this process; postings on different projects
use different locks and run in parallel. Across processes the budget row
lock (SELECT FOR UPDATE) taken inside the transaction does the same job.
"""

import asyncio
from typing import Dict


class PostingLockRegistry:

    def __init__(self):
        self._locks: Dict[int, asyncio.Lock] = {}

    def lock_for(self, project_id: int) -> asyncio.Lock:
        """Return the lock serializing postings for project_id"""
        lock = self._locks.get(project_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[project_id] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)
