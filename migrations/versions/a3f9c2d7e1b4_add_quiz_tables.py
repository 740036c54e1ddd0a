"""Add quiz tables

Revision ID: a3f9c2d7e1b4
Revises:
Create Date: 2026-10-19 09:12:04.118230

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect
from sqlalchemy.dialects import mysql

# revision identifiers, used by Alembic.
revision = 'a3f9c2d7e1b4'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    inspector = inspect(op.get_bind())
    tables = inspector.get_table_names()

    # Create quizzes table
    if 'quizzes' not in tables:
        op.create_table('quizzes',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('title', sa.String(length=200), nullable=False),
            sa.Column('created_at', sa.DateTime().with_variant(mysql.DATETIME(fsp=6), 'mysql'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_quizzes_created_at', 'quizzes', ['created_at'], unique=False)

    # Create quiz_questions table
    if 'quiz_questions' not in tables:
        op.create_table('quiz_questions',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('quiz_id', sa.String(length=36), nullable=False),
            sa.Column('question_type', sa.String(length=50), nullable=False),
            sa.Column('question_text', sa.String(length=300), nullable=False),
            sa.Column('order_index', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('correct_answer', sa.String(length=300), nullable=True),
            sa.Column('created_at', sa.DateTime().with_variant(mysql.DATETIME(fsp=6), 'mysql'), nullable=False),
            sa.ForeignKeyConstraint(['quiz_id'], ['quizzes.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_quiz_questions_quiz_id', 'quiz_questions', ['quiz_id'], unique=False)
        op.create_index('ix_quiz_questions_quiz_order', 'quiz_questions', ['quiz_id', 'order_index'], unique=False)

    # Create quiz_question_options table
    if 'quiz_question_options' not in tables:
        op.create_table('quiz_question_options',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('question_id', sa.String(length=36), nullable=False),
            sa.Column('option_text', sa.Text(), nullable=False),
            sa.Column('is_correct', sa.Boolean(), nullable=False, server_default='0'),
            sa.Column('order_index', sa.Integer(), nullable=False, server_default='0'),
            sa.ForeignKeyConstraint(['question_id'], ['quiz_questions.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_quiz_question_options_question_id', 'quiz_question_options', ['question_id'], unique=False)
        op.create_index('ix_question_options_question_order', 'quiz_question_options', ['question_id', 'order_index'], unique=False)


def downgrade():
    op.drop_index('ix_question_options_question_order', table_name='quiz_question_options')
    op.drop_index('ix_quiz_question_options_question_id', table_name='quiz_question_options')
    op.drop_table('quiz_question_options')

    op.drop_index('ix_quiz_questions_quiz_order', table_name='quiz_questions')
    op.drop_index('ix_quiz_questions_quiz_id', table_name='quiz_questions')
    op.drop_table('quiz_questions')

    op.drop_index('ix_quizzes_created_at', table_name='quizzes')
    op.drop_table('quizzes')
