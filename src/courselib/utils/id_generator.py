import uuid


def new_author_id() -> str:
    return str(uuid.uuid4())


def new_course_id() -> str:
    return str(uuid.uuid4())
