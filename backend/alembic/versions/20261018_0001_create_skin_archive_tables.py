"""Create skins, files and ia_items tables."""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "20261018_0001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None

TIMESTAMP_DEFAULT = sa.text("CURRENT_TIMESTAMP")


def upgrade() -> None:
    op.create_table(
        "skins",
        sa.Column("md5", sa.String(length=32), nullable=False),
        sa.Column("skin_type", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=TIMESTAMP_DEFAULT,
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("md5"),
    )
    op.create_index("ix_skins_skin_type", "skins", ["skin_type"], unique=False)

    op.create_table(
        "files",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("skin_md5", sa.String(length=32), nullable=False),
        sa.Column("file_path", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["skin_md5"], ["skins.md5"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_files_skin_md5_id", "files", ["skin_md5", "id"], unique=False)

    op.create_table(
        "ia_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("skin_md5", sa.String(length=32), nullable=False),
        sa.Column("identifier", sa.String(length=255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=TIMESTAMP_DEFAULT,
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["skin_md5"], ["skins.md5"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ia_items_skin_md5", "ia_items", ["skin_md5"], unique=False)
    op.create_index("ix_ia_items_identifier", "ia_items", ["identifier"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_ia_items_identifier", table_name="ia_items")
    op.drop_index("ix_ia_items_skin_md5", table_name="ia_items")
    op.drop_table("ia_items")
    op.drop_index("ix_files_skin_md5_id", table_name="files")
    op.drop_table("files")
    op.drop_index("ix_skins_skin_type", table_name="skins")
    op.drop_table("skins")
