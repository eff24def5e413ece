import uvicorn

from registry_auth.config.environment_variables import EnvironmentVariables


def main() -> None:
    environment_variables = EnvironmentVariables.refresh()
    uvicorn.run(
        "registry_auth.main:app",
        host=environment_variables.HOST,
        port=environment_variables.PORT,
    )


if __name__ == "__main__":
    main()
