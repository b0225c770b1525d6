from .app import create_app

create_app().run(host="0.0.0.0", port=9191, debug=False, use_reloader=False)
