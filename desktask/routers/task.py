# desktask/routers/task.py
from fastapi import APIRouter, Depends

from desktask.dependencies.desk import get_desk_app
from desktask.desk import DeskApp
from desktask.schemas.task import TaskCreate, TaskRead

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.get("", response_model=list[TaskRead])
def get_tasks(desk: DeskApp = Depends(get_desk_app)):
    return desk.get_tasks()


@router.post("", response_model=TaskRead)
def add_task(body: TaskCreate, desk: DeskApp = Depends(get_desk_app)):
    return desk.add_task(body.text, body.due_date, body.priority)


@router.post("/{task_id}/toggle", response_model=list[TaskRead])
def toggle_task(task_id: int, desk: DeskApp = Depends(get_desk_app)):
    return desk.toggle_task(task_id)


@router.delete("/{task_id}", response_model=list[TaskRead])
def delete_task(task_id: int, desk: DeskApp = Depends(get_desk_app)):
    return desk.delete_task(task_id)
