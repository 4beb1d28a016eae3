"""
A simple CLI for setting up the database and running the server.
"""

import os
import sys

import uvicorn

from usergroups.config.settings import Settings

USAGE = "Supported commands are usergroups setup, usergroups run dev, or usergroups run prod"


def run_server(settings: Settings):
    uvicorn.run(
        "usergroups.api.app:create_app",
        factory=True,
        host=settings.hostname,
        port=settings.port,
    )


def setup(settings: Settings):
    """
    Create the `users`, `user_groups` and `user_to_group` tables.
    """
    settings.sync_manager().create_all()
    print(f"Tables created in {settings.database_type} database {settings.database_db}")


def main():
    try:
        command = sys.argv[1]
        mode = sys.argv[2] if command == "run" else None
    except IndexError:
        print(USAGE)
        exit(1)

    if command == "setup":
        setup(Settings())
        return

    if command == "run" and mode == "dev":
        from testcontainers.postgres import PostgresContainer

        with PostgresContainer() as container:
            print(
                f"Container details: username={container.username}, password={container.password}, port={container.get_exposed_port(container.port)}"
            )

            environment = {
                "USERGROUPS_DATABASE_TYPE": "postgres",
                "USERGROUPS_DATABASE_USER": container.username,
                "USERGROUPS_DATABASE_PASSWORD": container.password,
                "USERGROUPS_DATABASE_PORT": str(
                    container.get_exposed_port(container.port)
                ),
                "USERGROUPS_DATABASE_HOST": "localhost",
                "USERGROUPS_DATABASE_DB": container.dbname,
                "USERGROUPS_DATABASE_ECHO": "False",
                "USERGROUPS_CREATE_TABLES": "True",
            }

            for k, v in environment.items():
                os.environ[k] = v

            run_server(Settings())
        return

    if command == "run" and mode == "prod":
        settings = Settings()
        setup(settings)
        run_server(settings)
        return

    print(USAGE)
    exit(1)
