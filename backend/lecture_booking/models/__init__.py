from .generated import Base, Courses, Reservations, metadata

__all__ = ["Base", "Courses", "Reservations", "metadata"]
