"""initial schema: identities, profiles, user_roles, maids, jobs"""

from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

JOB_TYPES = ("hourly", "daily", "monthly")
JOB_STATUSES = ("pending", "accepted", "completed", "cancelled")


def _fk(target, name):
    return sa.ForeignKey(target, ondelete="CASCADE", name=name, deferrable=True, initially="DEFERRED")


def _timestamp(name):
    return sa.Column(name, sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now())


def upgrade():
    op.create_table(
        "identities",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("user_metadata", sa.JSON(), nullable=False),
        _timestamp("created_at"),
    )

    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), _fk("identities.id", "fk_profiles_id"), primary_key=True),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=False),
        sa.Column("phone", sa.String(20), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )

    op.create_table(
        "user_roles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), _fk("identities.id", "fk_user_roles_user_id"), nullable=False),
        sa.Column("role", sa.Enum("customer", "maid", name="app_role"), nullable=False),
        sa.UniqueConstraint("user_id", "role", name="user_roles_user_id_role_key"),
    )
    op.create_index("ix_user_roles_user_id", "user_roles", ["user_id"], unique=False)

    op.create_table(
        "maids",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), _fk("profiles.id", "maids_user_id_fkey"), nullable=False, unique=True),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("daily_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("monthly_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("rating", sa.Numeric(3, 2), nullable=False, server_default="0"),
        sa.Column("total_jobs", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("completed_jobs", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.CheckConstraint("hourly_rate > 0 AND hourly_rate < 10000", name="check_hourly_rate_positive"),
        sa.CheckConstraint("daily_rate > 0 AND daily_rate < 50000", name="check_daily_rate_positive"),
        sa.CheckConstraint("monthly_rate > 0 AND monthly_rate < 500000", name="check_monthly_rate_positive"),
    )

    op.create_table(
        "jobs",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("customer_id", sa.Uuid(), _fk("identities.id", "fk_jobs_customer_id"), nullable=False),
        sa.Column("maid_id", sa.Uuid(), _fk("maids.id", "fk_jobs_maid_id"), nullable=False),
        sa.Column("job_date", sa.Date(), nullable=False),
        sa.Column("duration", sa.Text(), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column(
            "job_type",
            sa.Enum(*JOB_TYPES, name="jobs_job_type_check", native_enum=False, create_constraint=True),
            nullable=False,
        ),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*JOB_STATUSES, name="jobs_status_check", native_enum=False, create_constraint=True),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("version", sa.Integer(), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )
    op.create_index("ix_jobs_customer_id", "jobs", ["customer_id"], unique=False)
    op.create_index("ix_jobs_maid_id", "jobs", ["maid_id"], unique=False)


def downgrade():
    op.drop_index("ix_jobs_maid_id", table_name="jobs")
    op.drop_index("ix_jobs_customer_id", table_name="jobs")
    op.drop_table("jobs")
    op.drop_table("maids")
    op.drop_index("ix_user_roles_user_id", table_name="user_roles")
    op.drop_table("user_roles")
    op.drop_table("profiles")
    op.drop_table("identities")
    sa.Enum(name="app_role").drop(op.get_bind(), checkfirst=True)
