# extensions.py
# Flask extension instances shared by the app factory, models and routes

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

db = SQLAlchemy()
migrate = Migrate()
