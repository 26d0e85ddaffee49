from .user import UserCreate, UserLogin, UserOut, UserUpdate, PasswordChange, ProfileOut, ProfileUpdateOut, MessageOut
from .tokens import Token
from .task import TaskCreate, TaskUpdate, TaskOut, TaskStatusUpdate, TaskDetailOut, TaskMutationOut, TaskListOut
