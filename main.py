# main.py
from flask import Flask, request, jsonify
import logging

# Наши модули (config сам подтягивает .env)
from config import LOG_LEVEL, PORT
from services.errors import MalformedParameterError
from services.pipeline import EventQueryHandler, error_payload
from services.runtime_config import get_secret_store

# -------------------- Базовая инициализация --------------------

app = Flask(__name__)
# неизвестный SECRET_BACKEND падает здесь, при старте, а не в запросе
secret_store = get_secret_store()

# Логирование в stdout (видно в логах хостинга)
logging.basicConfig(level=LOG_LEVEL)
log = app.logger


def get_handler() -> EventQueryHandler:
    # one handler per app; built lazily so tests can swap it before first use
    handler = app.extensions.get("event_query_handler")
    if handler is None:
        handler = EventQueryHandler(secret_store)
        app.extensions["event_query_handler"] = handler
    return handler


# -------------------- Роуты сервиса --------------------

@app.route("/", methods=["GET"])
def index():
    return "Meetup webhook is running!"

@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"}), 200

@app.route("/webhook", methods=["POST"])
async def webhook():
    """Dialogflow fulfillment: queryResult.parameters -> fulfillmentText."""
    data = request.get_json(force=True, silent=True)
    log.info("RAW IN: %s", data)

    if data is None:
        err = MalformedParameterError("request body is not JSON")
        return jsonify(error_payload(err.kind, str(err))), 500

    result = await get_handler().handle(data)
    log.info("REPLY (%s): %s", result.stage.value, result.payload)
    return jsonify(result.payload), result.status

# -------------------- Локальный запуск --------------------

if __name__ == "__main__":
    # Для локального запуска: python main.py
    app.run(host="0.0.0.0", port=PORT)
