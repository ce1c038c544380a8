"""Configuration management using Dynaconf."""

from dynaconf import Dynaconf, Validator

# Initialize Dynaconf with validators
settings = Dynaconf(
    envvar_prefix="PHPMETRICS",
    settings_files=["settings.toml", ".secrets.toml"],
    environments=True,
    load_dotenv=True,
    dotenv_path=".env",
    merge_enabled=True,
    validators=[
        # Logging validators
        Validator("logging.level", default="INFO"),
        Validator("logging.format", default="text"),
        Validator("logging.console_colorized", default=False),
        Validator("logging.file_enabled", default=False),
        Validator("logging.file_path", default="logs/phpmetrics.log"),
        Validator("logging.file_rotation", default="daily"),
        Validator("logging.file_retention_days", default=7, gte=1),
        Validator(
            "logging.level", is_in=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        ),
        Validator("logging.format", is_in=["json", "text"]),
        # Analysis validators
        Validator("analysis.render_bodies", default=True, is_type_of=bool),
        Validator("analysis.max_body_length", default=0, gte=0),
    ],
)
