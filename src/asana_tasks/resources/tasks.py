# src/asana_tasks/resources/tasks.py

"""
Tasks resource router.

A task is the basic object most Asana operations are centered on. Every method
below formats one path, picks a dispatcher method and returns the dispatcher's
awaitable unchanged. Identifier checks happen at call time, so a bad argument
raises before any request exists.
"""

from __future__ import annotations

from typing import Awaitable

from ..core.models import Payload, Record
from .base import Resource


class Tasks(Resource):
    def create(self, data: Payload | None = None) -> Awaitable[Record]:
        """
        Create a task. Every task lives in exactly one workspace; it may be given
        explicitly or inferred from a `projects` or `parent` field in `data`.
        """
        return self.dispatcher.post("/tasks", data)

    def create_in_workspace(self, workspace: int, data: Payload | None = None) -> Awaitable[Record]:
        """Create a task in a fixed workspace (it can't be moved afterwards)."""
        path = self._path("/workspaces/{workspace}/tasks", workspace=workspace)
        return self.dispatcher.post(path, data)

    def find_by_id(self, task: int, params: Payload | None = None) -> Awaitable[Record]:
        """Return the complete task record."""
        path = self._path("/tasks/{task}", task=task)
        return self.dispatcher.get(path, params)

    def update(self, task: int, data: Payload | None = None) -> Awaitable[Record]:
        """
        Partial update: only fields present in `data` change.

        Send only the fields you mean to change, otherwise you may overwrite edits
        another user made since you last fetched the task.
        """
        path = self._path("/tasks/{task}", task=task)
        return self.dispatcher.put(path, data)

    def delete(self, task: int) -> Awaitable[Record]:
        """Move the task to the trash (recoverable for 30 days). Returns an empty record."""
        path = self._path("/tasks/{task}", task=task)
        return self.dispatcher.delete(path)

    def find_by_project(self, project: int, params: Payload | None = None) -> Awaitable[list[Record]]:
        """Compact records of the project's tasks, in project priority order."""
        path = self._path("/projects/{project}/tasks", project=project)
        return self.dispatcher.get_collection(path, params)

    def find_by_tag(self, tag: int, params: Payload | None = None) -> Awaitable[list[Record]]:
        path = self._path("/tags/{tag}/tasks", tag=tag)
        return self.dispatcher.get_collection(path, params)

    def find_all(self, params: Payload | None = None) -> Awaitable[list[Record]]:
        """
        Compact records for a filtered set of tasks.

        Filters: assignee, workspace, completed_since, modified_since.
        """
        return self.dispatcher.get_collection("/tasks", params)

    def add_followers(self, task: int, data: Payload | None = None) -> Awaitable[Record]:
        """Add `followers`; users already following are ignored."""
        path = self._path("/tasks/{task}/addFollowers", task=task)
        return self.dispatcher.post(path, data)

    def remove_followers(self, task: int, data: Payload | None = None) -> Awaitable[Record]:
        """Remove `followers`; users not following are ignored."""
        path = self._path("/tasks/{task}/removeFollowers", task=task)
        return self.dispatcher.post(path, data)

    def projects(self, task: int, params: Payload | None = None) -> Awaitable[list[Record]]:
        path = self._path("/tasks/{task}/projects", task=task)
        return self.dispatcher.get_collection(path, params)

    def add_project(self, task: int, data: Payload | None = None) -> Awaitable[Record]:
        """
        Add the task to `project`, or move it within a project that already has it.

        Location: `insert_after`, `insert_before` or `section`. Without one the task
        goes to the beginning of the project.
        """
        path = self._path("/tasks/{task}/addProject", task=task)
        return self.dispatcher.post(path, data)

    def remove_project(self, task: int, data: Payload | None = None) -> Awaitable[Record]:
        """Drop the task from `project`. The task itself keeps existing."""
        path = self._path("/tasks/{task}/removeProject", task=task)
        return self.dispatcher.post(path, data)

    def tags(self, task: int, params: Payload | None = None) -> Awaitable[list[Record]]:
        path = self._path("/tasks/{task}/tags", task=task)
        return self.dispatcher.get_collection(path, params)

    def add_tag(self, task: int, data: Payload | None = None) -> Awaitable[Record]:
        path = self._path("/tasks/{task}/addTag", task=task)
        return self.dispatcher.post(path, data)

    def remove_tag(self, task: int, data: Payload | None = None) -> Awaitable[Record]:
        path = self._path("/tasks/{task}/removeTag", task=task)
        return self.dispatcher.post(path, data)

    def subtasks(self, task: int, params: Payload | None = None) -> Awaitable[list[Record]]:
        path = self._path("/tasks/{task}/subtasks", task=task)
        return self.dispatcher.get_collection(path, params)

    def add_subtask(self, task: int, data: Payload | None = None) -> Awaitable[Record]:
        """Make an existing task (`subtask`) a child of `task`."""
        path = self._path("/tasks/{task}/subtasks", task=task)
        return self.dispatcher.post(path, data)

    def stories(self, task: int, params: Payload | None = None) -> Awaitable[list[Record]]:
        path = self._path("/tasks/{task}/stories", task=task)
        return self.dispatcher.get_collection(path, params)

    def add_comment(self, task: int, data: Payload | None = None) -> Awaitable[Record]:
        """
        Post a comment (`text`) as the authenticated user; the server sets the timestamp.
        Returns the new story record.
        """
        path = self._path("/tasks/{task}/stories", task=task)
        return self.dispatcher.post(path, data)
