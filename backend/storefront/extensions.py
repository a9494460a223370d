from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager

from .domain.sections.catalogue import build_default_registry

db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()

# Section kinds are static for the lifetime of the process
section_registry = build_default_registry()
