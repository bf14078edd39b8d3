def test_pix_routes_registered():
    # Basic import test to ensure routers load
    from main import app
    paths = set(app.openapi()["paths"])
    assert {"/", "/api", "/api/pix/create", "/api/pix/status/{transaction_id}", "/api/webhook/pix"} <= paths
