# /classboard-backend/classboard/db/base.py

# This file acts as a central registry for all our SQLAlchemy models.
# Importing them here guarantees `Base.metadata` knows every table before
# `create_all` runs at startup or in the test fixtures.

from .base_class import Base

from .models.board_models import Board
from .models.student_photo_models import Student, Photo
from .models.view_models import PhotoView
from .models.activity_models import Activity
