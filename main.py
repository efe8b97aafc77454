import logging

from battlesnake import create_battlesnake_server
from config import load_settings

settings = load_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create Flask app and snake logic
app = create_battlesnake_server(settings=settings)

if __name__ == "__main__":
    logging.getLogger(__name__).info(
        "🐍 Battlesnake server starting at http://%s:%d", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port, debug=settings.debug)
