"""Development entry point: ``python app.py`` (or ``flask --app app run``)."""
import importlib

from config import get_settings_module

from attendance_tracker.main import create_app

app = create_app()


if __name__ == "__main__":
    settings = importlib.import_module(get_settings_module())
    app.run(host=settings.HOST, port=settings.PORT, debug=settings.DEBUG)
