"""
Database models for projectdesk (authoritative ORM definitions).

Defines the SQLAlchemy Base with a naming convention for stable constraint
names. Primary keys are integers assigned by the database on insert; an unset
id marks a record that has not been persisted yet.
"""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKeyConstraint,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

# Naming convention for deterministic constraint/index names
naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all database models with type checking support."""

    metadata = MetaData(naming_convention=naming_convention)


class Tenants(Base):
    __tablename__ = "tenants"
    __table_args__ = (PrimaryKeyConstraint("id", name="tenants_pkey"),)

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=func.now(), onupdate=func.now()
    )

    users: Mapped[list["Users"]] = relationship("Users", uselist=True, back_populates="tenant")
    projects: Mapped[list["Projects"]] = relationship(
        "Projects", uselist=True, back_populates="tenant"
    )
    tasks: Mapped[list["Tasks"]] = relationship("Tasks", uselist=True, back_populates="tenant")


class Users(Base):
    __tablename__ = "users"
    __table_args__ = (
        ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            ondelete="CASCADE",
            name="users_tenant_id_fkey",
        ),
        PrimaryKeyConstraint("id", name="users_pkey"),
        UniqueConstraint("user_name", name="users_user_name_key"),
        Index("idx_users_tenant", "tenant_id"),
        Index("idx_users_email", "email"),
    )

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    # Host-level users (administrators) belong to no tenant
    tenant_id: Mapped[int | None] = mapped_column(Integer)
    user_name: Mapped[str] = mapped_column(String(256), nullable=False)
    email: Mapped[str | None] = mapped_column(String(256))
    first_name: Mapped[str | None] = mapped_column(String(255))
    last_name: Mapped[str | None] = mapped_column(String(255))
    display_name: Mapped[str | None] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    password_hash: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=func.now(), onupdate=func.now()
    )

    tenant: Mapped["Tenants | None"] = relationship("Tenants", back_populates="users")
    roles: Mapped[list["UserRoles"]] = relationship(
        "UserRoles",
        uselist=True,
        back_populates="user",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    @property
    def role_names(self) -> frozenset[str]:
        return frozenset(role.role_name for role in self.roles)


class UserRoles(Base):
    __tablename__ = "user_roles"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            ondelete="CASCADE",
            name="user_roles_user_id_fkey",
        ),
        PrimaryKeyConstraint("user_id", "role_name", name="user_roles_pkey"),
    )

    user_id: Mapped[int] = mapped_column(Integer)
    role_name: Mapped[str] = mapped_column(String(100))

    user: Mapped["Users"] = relationship("Users", back_populates="roles")


class Projects(Base):
    __tablename__ = "projects"
    __table_args__ = (
        ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            ondelete="CASCADE",
            name="projects_tenant_id_fkey",
        ),
        PrimaryKeyConstraint("id", name="projects_pkey"),
        Index("idx_projects_tenant", "tenant_id"),
    )

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=func.now(), onupdate=func.now()
    )

    tenant: Mapped["Tenants"] = relationship("Tenants", back_populates="projects")
    tasks: Mapped[list["Tasks"]] = relationship("Tasks", uselist=True, back_populates="project")


class Tasks(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            ondelete="CASCADE",
            name="tasks_tenant_id_fkey",
        ),
        ForeignKeyConstraint(
            ["project_id"],
            ["projects.id"],
            ondelete="SET NULL",
            name="tasks_project_id_fkey",
        ),
        PrimaryKeyConstraint("id", name="tasks_pkey"),
        Index("idx_tasks_tenant", "tenant_id"),
        Index("idx_tasks_project", "project_id"),
    )

    id: Mapped[int] = mapped_column(Integer, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(Integer, nullable=False)
    project_id: Mapped[int | None] = mapped_column(Integer)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    due_date: Mapped[datetime | None] = mapped_column(DateTime(True))
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completion_date: Mapped[datetime | None] = mapped_column(DateTime(True))
    created_at: Mapped[datetime] = mapped_column(DateTime(True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(True), server_default=func.now(), onupdate=func.now()
    )

    tenant: Mapped["Tenants"] = relationship("Tenants", back_populates="tasks")
    project: Mapped["Projects | None"] = relationship("Projects", back_populates="tasks")


__all__ = [
    "Base",
    "Projects",
    "Tasks",
    "Tenants",
    "UserRoles",
    "Users",
]
