"""add_unique_index_for_active_booking_slots

Revision ID: 0002_unique_active_booking_slot
Revises: 0001_create_initial_tables
Create Date: 2026-10-19 10:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0002_unique_active_booking_slot"
down_revision: Union[str, None] = "0001_create_initial_tables"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Partial unique index: two active bookings cannot start at the same
    # facility, sport, date and time. Cancelled, rejected and finished
    # bookings do not hold the slot.
    op.execute("""
        CREATE UNIQUE INDEX IF NOT EXISTS uq_active_booking_slot
        ON bookings (facility_id, sport_type, booking_date, start_time)
        WHERE status IN ('PENDING', 'CONFIRMED', 'CHECKED_IN');
    """)


def downgrade() -> None:
    """Downgrade schema."""
    op.execute("DROP INDEX IF EXISTS uq_active_booking_slot;")
