"""Memory-aware task scheduler for parallel rendition encoding"""

import time
import psutil
import logging
from concurrent.futures import Future
from typing import Dict, List, Tuple

log = logging.getLogger(__name__)

class MemoryAwareScheduler:
    def __init__(self, max_tasks: int, memory_reserve: float, task_stagger_delay: float):
        self.max_tasks = max_tasks
        self.memory_reserve = memory_reserve
        self.task_stagger_delay = task_stagger_delay
        self.running_tasks: Dict[int, Future] = {}

    def can_submit(self) -> bool:
        """
        Determine if a new task can be submitted.
        A task is always allowed when nothing is running, so progress is guaranteed.
        """
        if not self.running_tasks:
            return True
        if len(self.running_tasks) >= self.max_tasks:
            return False
        mem = psutil.virtual_memory()
        if mem.available <= mem.total * self.memory_reserve:
            log.debug("Low available memory (%d%% used); holding submissions", mem.percent)
            return False
        return True

    def add_task(self, task_id: int, future: Future) -> None:
        """Record a submitted task and apply a stagger delay."""
        self.running_tasks[task_id] = future
        time.sleep(self.task_stagger_delay)

    def update_completed(self) -> List[Tuple[int, Future]]:
        """Remove completed tasks from running_tasks and return them."""
        completed = [(tid, fut) for tid, fut in self.running_tasks.items() if fut.done()]
        for tid, _ in completed:
            self.running_tasks.pop(tid)
        return completed
