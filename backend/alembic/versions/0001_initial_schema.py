"""Initial adoption schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

# Enum columns persist member names, matching the ORM's sa.Enum(EnumClass).
user_role_enum = sa.Enum("USER", "SHELTER", "ADMIN", name="userrole")
pet_gender_enum = sa.Enum("MALE", "FEMALE", name="petgender")
pet_size_enum = sa.Enum("SMALL", "MEDIUM", "LARGE", name="petsize")
health_status_enum = sa.Enum(
    "HEALTHY", "NEEDS_CARE", "RECOVERING", name="healthstatus"
)
adoption_status_enum = sa.Enum(
    "AVAILABLE", "PENDING", "ADOPTED", name="adoptionstatus"
)
energy_level_enum = sa.Enum("LOW", "MEDIUM", "HIGH", name="energylevel")
adoption_request_status_enum = sa.Enum(
    "PENDING", "APPROVED", "REJECTED", "COMPLETED", name="adoptionrequeststatus"
)
donation_status_enum = sa.Enum(
    "PENDING", "ACCEPTED", "REJECTED", "COMPLETED", name="donationstatus"
)
document_type_enum = sa.Enum(
    "VACCINATION_RECORD",
    "HEALTH_CERTIFICATE",
    "MEDICAL_HISTORY",
    "ADOPTION_CONTRACT",
    "IDENTIFICATION",
    "OTHER",
    name="documenttype",
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", user_role_enum, nullable=False),
        sa.Column("phone", sa.String(length=32)),
        sa.Column("address", sa.Text()),
        sa.Column(
            "is_active", sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        sa.Column("profile_image", sa.String(length=1024)),
        *_timestamps(),
    )
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "pets",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("breed", sa.String(length=120), nullable=False),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("gender", pet_gender_enum, nullable=False),
        sa.Column("size", pet_size_enum, nullable=False),
        sa.Column("color", sa.String(length=120)),
        sa.Column("description", sa.Text()),
        sa.Column("health_status", health_status_enum, nullable=False),
        sa.Column("vaccination_status", sa.Boolean(), nullable=False),
        sa.Column("spayed_neutered", sa.Boolean(), nullable=False),
        sa.Column("adoption_status", adoption_status_enum, nullable=False),
        sa.Column(
            "uploaded_by",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("adoption_fee", sa.Numeric(10, 2), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("special_needs", sa.Text()),
        sa.Column("good_with_kids", sa.Boolean(), nullable=False),
        sa.Column("good_with_pets", sa.Boolean(), nullable=False),
        sa.Column("energy_level", energy_level_enum, nullable=False),
        sa.Column("version_id", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_pets_breed", "pets", ["breed"])
    op.create_index("ix_pets_adoption_status", "pets", ["adoption_status"])
    op.create_index("ix_pets_uploaded_by", "pets", ["uploaded_by"])

    op.create_table(
        "adoptions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "pet_id",
            sa.Integer(),
            sa.ForeignKey("pets.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", adoption_request_status_enum, nullable=False),
        sa.Column("application_message", sa.Text(), nullable=False),
        sa.Column("contact_phone", sa.String(length=32)),
        sa.Column("contact_address", sa.Text()),
        sa.Column("experience_with_pets", sa.Text()),
        sa.Column("living_situation", sa.Text()),
        sa.Column("other_pets", sa.Text()),
        sa.Column("admin_notes", sa.Text()),
        sa.Column("rejection_reason", sa.Text()),
        sa.Column(
            "approved_by",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
        ),
        sa.Column("approved_at", sa.DateTime(timezone=True)),
        sa.Column("completed_at", sa.DateTime(timezone=True)),
        sa.Column("version_id", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_adoptions_pet_id", "adoptions", ["pet_id"])
    op.create_index("ix_adoptions_user_id", "adoptions", ["user_id"])
    op.create_index("ix_adoptions_status", "adoptions", ["status"])

    op.create_table(
        "donations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "pet_id",
            sa.Integer(),
            sa.ForeignKey("pets.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "shelter_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "donor_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
        ),
        sa.Column("donor_name", sa.String(length=120)),
        sa.Column("donor_email", sa.String(length=320)),
        sa.Column("donor_phone", sa.String(length=32)),
        sa.Column("donation_reason", sa.Text()),
        sa.Column("pet_background", sa.Text()),
        sa.Column("status", donation_status_enum, nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("pickup_date", sa.DateTime(timezone=True)),
        sa.Column("notes", sa.Text()),
        sa.Column("admin_notes", sa.Text()),
        sa.Column(
            "processed_by",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
        ),
        sa.Column("processed_at", sa.DateTime(timezone=True)),
        sa.Column("version_id", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_donations_pet_id", "donations", ["pet_id"])
    op.create_index("ix_donations_shelter_id", "donations", ["shelter_id"])
    op.create_index("ix_donations_donor_id", "donations", ["donor_id"])
    op.create_index("ix_donations_status", "donations", ["status"])

    op.create_table(
        "favorites",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "pet_id",
            sa.Integer(),
            sa.ForeignKey("pets.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint("user_id", "pet_id", name="uq_favorites_user_pet"),
    )
    op.create_index("ix_favorites_user_id", "favorites", ["user_id"])
    op.create_index("ix_favorites_pet_id", "favorites", ["pet_id"])

    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "pet_id",
            sa.Integer(),
            sa.ForeignKey("pets.id", ondelete="CASCADE"),
        ),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("file_path", sa.String(length=1024), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("mime_type", sa.String(length=128), nullable=False),
        sa.Column("document_type", document_type_enum, nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column(
            "is_verified", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column(
            "verified_by",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
        ),
        sa.Column("verified_at", sa.DateTime(timezone=True)),
        sa.Column("verification_notes", sa.Text()),
        *_timestamps(),
    )
    op.create_index("ix_documents_pet_id", "documents", ["pet_id"])
    op.create_index("ix_documents_user_id", "documents", ["user_id"])

    op.create_table(
        "audit_events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
        ),
        sa.Column("event_type", sa.String(length=120), nullable=False),
        sa.Column("description", sa.String(length=1024)),
        sa.Column("payload", sa.JSON()),
        sa.Column("ip_address", sa.String(length=64)),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_audit_events_event_type", "audit_events", ["event_type"])
    op.create_index(
        "ix_audit_events_user_created", "audit_events", ["user_id", "created_at"]
    )


def downgrade() -> None:
    op.drop_index("ix_audit_events_user_created", table_name="audit_events")
    op.drop_index("ix_audit_events_event_type", table_name="audit_events")
    op.drop_table("audit_events")

    op.drop_index("ix_documents_user_id", table_name="documents")
    op.drop_index("ix_documents_pet_id", table_name="documents")
    op.drop_table("documents")

    op.drop_index("ix_favorites_pet_id", table_name="favorites")
    op.drop_index("ix_favorites_user_id", table_name="favorites")
    op.drop_table("favorites")

    op.drop_index("ix_donations_status", table_name="donations")
    op.drop_index("ix_donations_donor_id", table_name="donations")
    op.drop_index("ix_donations_shelter_id", table_name="donations")
    op.drop_index("ix_donations_pet_id", table_name="donations")
    op.drop_table("donations")

    op.drop_index("ix_adoptions_status", table_name="adoptions")
    op.drop_index("ix_adoptions_user_id", table_name="adoptions")
    op.drop_index("ix_adoptions_pet_id", table_name="adoptions")
    op.drop_table("adoptions")

    op.drop_index("ix_pets_uploaded_by", table_name="pets")
    op.drop_index("ix_pets_adoption_status", table_name="pets")
    op.drop_index("ix_pets_breed", table_name="pets")
    op.drop_table("pets")

    op.drop_index("ix_users_role", table_name="users")
    op.drop_table("users")

    bind = op.get_bind()
    for enum in (
        document_type_enum,
        donation_status_enum,
        adoption_request_status_enum,
        energy_level_enum,
        adoption_status_enum,
        health_status_enum,
        pet_size_enum,
        pet_gender_enum,
        user_role_enum,
    ):
        enum.drop(bind, checkfirst=True)
