# routes/tasks.py
import uuid
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from task_api.models import Task, TaskCreate, TaskUpdate
from task_api.repository import TaskRepository

router = APIRouter()


def get_repository(request: Request) -> TaskRepository:
    return request.app.state.repository


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Task)
async def create_task(payload: TaskCreate, repo: TaskRepository = Depends(get_repository)):
    task = Task.new(payload.title, payload.description)
    return await repo.create(task)


@router.get("", response_model=List[Task])
async def read_tasks(repo: TaskRepository = Depends(get_repository)):
    return await repo.list()


@router.get("/{task_id}", response_model=Task)
async def read_task(task_id: uuid.UUID, repo: TaskRepository = Depends(get_repository)):
    task = await repo.get(task_id)
    if task is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return task


@router.put("/{task_id}")
async def update_task(
    task_id: uuid.UUID,
    payload: TaskUpdate,
    repo: TaskRepository = Depends(get_repository),
):
    matched = await repo.update(task_id, payload.title, payload.description)
    if not matched:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/{task_id}")
async def delete_task(task_id: uuid.UUID, repo: TaskRepository = Depends(get_repository)):
    deleted = await repo.delete(task_id)
    if not deleted:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
