from sqlalchemy import create_engine, text

from bookstore.cli import main, render_dot


def test_render_dot():
    out = render_dot({"B": ("A",), "A": ()})
    assert out.splitlines()[0] == "digraph G {"
    assert '  "B" -> "A";' in out
    assert out.index('"A";') < out.index('"B";')


def test_graph_command_prints_container_wiring(capsys, monkeypatch):
    monkeypatch.delenv("BOOKSTORE_REPOSITORY", raising=False)
    assert main(["graph"]) == 0
    out = capsys.readouterr().out
    assert '"BookController" -> "ListBooks";' in out
    assert '"SearchBooks" -> "BookRepository";' in out


def test_init_db_creates_and_seeds(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr("bookstore.cli.setup_logging", lambda level: None)
    dsn = f"sqlite:///{tmp_path/'books.db'}"
    assert main(["init-db", "--dsn", dsn]) == 0
    assert "[init-db] done" in capsys.readouterr().out
    eng = create_engine(dsn)
    with eng.begin() as conn:
        assert conn.execute(text("SELECT count(*) FROM books")).scalar_one() == 2
    eng.dispose()


def test_no_command_prints_help(capsys):
    assert main([]) == 2
    assert "usage" in capsys.readouterr().out
