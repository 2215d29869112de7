from agent_wallet.ui import serve


def test_defaults_come_from_api_config(monkeypatch):
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "9100")
    opts = serve.uvicorn_options([])
    assert opts["host"] == "0.0.0.0"
    assert opts["port"] == 9100
    assert opts["factory"] is True
    assert opts["reload"] is False


def test_main_hands_factory_to_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(serve.uvicorn, "run", lambda target, **kw: calls.append((target, kw)))
    serve.main(["--port", "8123", "--reload"])
    target, kw = calls[0]
    assert target == "agent_wallet.ui.api:create_app"
    assert kw["port"] == 8123 and kw["reload"] is True
