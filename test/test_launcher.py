import logging

import main


def test_run_logs_address_and_backends_instead_of_printing(monkeypatch, caplog, capsys):
    served = {}
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: served.update(app=app, **kwargs))
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("ORM", "mongo")
    monkeypatch.delenv("AUTH_MODE", raising=False)

    with caplog.at_level(logging.INFO, logger="main"):
        main.run()

    assert served["app"] == "backend_fastapi.main:app"
    assert served["port"] == 8080
    assert "http://0.0.0.0:8080" in caplog.text
    assert "orm=mongo" in caplog.text
    assert "auth=firebase" in caplog.text
    assert capsys.readouterr().out == ""
