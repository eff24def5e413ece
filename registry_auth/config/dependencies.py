from typing import Annotated

from fastapi import Depends, Request

from registry_auth.config.environment_variables import EnvironmentVariables
from registry_auth.utils.cached_httpx_client import close_async_clients


class Singleton(type):
    _instances = {}

    def __call__(cls, *args, **kwargs):
        if cls not in cls._instances:
            cls._instances[cls] = super(Singleton, cls).__call__(*args, **kwargs)
        return cls._instances[cls]


class GlobalDependencies(metaclass=Singleton):
    def __init__(self):
        self.environment_variables: EnvironmentVariables = (
            EnvironmentVariables.refresh()
        )

    async def load(self):
        self.environment_variables = EnvironmentVariables.refresh()


async def startup_global_dependencies():
    global_dependencies = GlobalDependencies()
    await global_dependencies.load()


def shutdown():
    pass


async def async_shutdown():
    await close_async_clients()


def resolve_environment_variables(request: Request) -> EnvironmentVariables:
    """
    Settings the serving app was built with, falling back to the process-wide
    settings for apps that were not given any.
    """
    environment_variables = getattr(request.app.state, "environment_variables", None)
    if environment_variables is not None:
        return environment_variables
    return GlobalDependencies().environment_variables


DEnvironmentVariables = Annotated[
    EnvironmentVariables, Depends(resolve_environment_variables)
]
