"""books table"""
from alembic import op

# revision identifiers, used by Alembic.
revision = '0001_books'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    # same DDL as SQLBookRepository.init_schema, idempotent on SQLite and PostgreSQL
    op.execute("""
    CREATE TABLE IF NOT EXISTS books (
      id TEXT PRIMARY KEY,
      title TEXT NOT NULL,
      author TEXT NOT NULL,
      price REAL NOT NULL
    );
    """)
    op.execute("CREATE INDEX IF NOT EXISTS idx_books_author ON books(author);")

def downgrade():
    op.execute("DROP INDEX IF EXISTS idx_books_author;")
    op.execute("DROP TABLE IF EXISTS books;")
