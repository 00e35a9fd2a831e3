from sqlalchemy import (
    Column,
    Date,
    ForeignKey,
    Index,
    String,
    Text,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Author(Base):
    __tablename__ = "authors"

    id = Column(String, primary_key=True)  # UUID string, assigned by the repository
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    main_category = Column(String(50), nullable=False, index=True)

    courses = relationship(
        "Course",
        back_populates="author",
        cascade="all, delete-orphan",
        order_by="Course.title",
    )

    __table_args__ = (
        Index("idx_authors_last_first", "last_name", "first_name"),
    )


class Course(Base):
    __tablename__ = "courses"

    id = Column(String, primary_key=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    author_id = Column(String, ForeignKey("authors.id"), nullable=False, index=True)

    author = relationship("Author", back_populates="courses")


def create_all(engine_url: str) -> None:
    engine = create_engine(engine_url)
    Base.metadata.create_all(engine)
