"""Initial engagement schema: students, attendance, performance, alerts, analytics

Revision ID: a1c4e7d2b9f0
Revises:
Create Date: 2025-02-10 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c4e7d2b9f0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create every table the engagement API reads and writes."""
    op.create_table(
        'students',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('studentId', sa.String(), nullable=False),
        sa.Column('enrollmentDate', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('grade', sa.String(), nullable=True),
        sa.Column('section', sa.String(), nullable=True),
        sa.Column('engagementScore', sa.Float(), nullable=False),
        sa.Column('attendanceRate', sa.Float(), nullable=False),
        sa.Column('createdAt', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updatedAt', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_students_id', 'students', ['id'])
    op.create_index('ix_students_name', 'students', ['name'])
    op.create_index('ix_students_email', 'students', ['email'], unique=True)
    op.create_index('ix_students_studentId', 'students', ['studentId'], unique=True)

    op.create_table(
        'attendance_records',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('student_id', sa.String(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('createdAt', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('student_id', 'date', name='uq_attendance_student_date'),
    )
    op.create_index('ix_attendance_records_id', 'attendance_records', ['id'])
    op.create_index('ix_attendance_records_student_id', 'attendance_records', ['student_id'])
    op.create_index('ix_attendance_records_date', 'attendance_records', ['date'])
    op.create_index('ix_attendance_records_status', 'attendance_records', ['status'])

    op.create_table(
        'performance_records',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('student_id', sa.String(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('subject', sa.String(), nullable=False),
        sa.Column('score', sa.Float(), nullable=False),
        sa.Column('maxScore', sa.Float(), nullable=False),
        sa.Column('letterGrade', sa.String(), nullable=True),
        sa.Column('gpa', sa.Float(), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('createdAt', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_performance_records_id', 'performance_records', ['id'])
    op.create_index('ix_performance_records_student_id', 'performance_records', ['student_id'])
    op.create_index('ix_performance_records_subject', 'performance_records', ['subject'])
    op.create_index('ix_performance_records_date', 'performance_records', ['date'])

    op.create_table(
        'alerts',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('student_id', sa.String(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('severity', sa.String(), nullable=False),
        sa.Column('message', sa.String(), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('isRead', sa.Boolean(), nullable=False),
        sa.Column('createdAt', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updatedAt', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_alerts_id', 'alerts', ['id'])
    op.create_index('ix_alerts_student_id', 'alerts', ['student_id'])
    op.create_index('ix_alerts_status', 'alerts', ['status'])

    op.create_table(
        'analytics',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('student_id', sa.String(), sa.ForeignKey('students.id'), nullable=False),
        sa.Column('metric', sa.String(), nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_analytics_id', 'analytics', ['id'])
    op.create_index('ix_analytics_student_id', 'analytics', ['student_id'])
    op.create_index('ix_analytics_metric', 'analytics', ['metric'])
    op.create_index('ix_analytics_timestamp', 'analytics', ['timestamp'])


def downgrade() -> None:
    """Drop every engagement table, children first."""
    op.drop_table('analytics')
    op.drop_table('alerts')
    op.drop_table('performance_records')
    op.drop_table('attendance_records')
    op.drop_table('students')
