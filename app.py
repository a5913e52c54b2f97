# app.py
# Entry point for the Number Feed server

import sys
import logging

from number_server import config, create_app
from number_server.state import NumberStore


def build_app():
    """Load config and data files, then create the app. Raises ConfigError on a bad config."""
    settings = config.load_config()
    logging.info(f"Config loaded => {settings.default_fetch_count} + 1 number(s) per fetch, test number: {settings.test_number}")

    numbers = config.load_numbers()
    message = config.load_message()
    logging.info(f"Loaded {len(numbers)} number(s), message: {message}")

    store = NumberStore.from_settings(settings, numbers, message)
    return create_app(store), settings


def main():
    try:
        app, settings = build_app()
    except config.ConfigError as e:
        logging.critical(f"Startup aborted: {e}")
        return 1

    lan_ip = config.get_lan_ip()
    print("--- Registered URL Routes ---\n", app.url_map, "\n-----------------------------")
    print("------------------------------------------")
    print(" Starting Number Feed server... ")
    print(f" Config file:  {config.CONFIG_PATH}")
    print(f" Numbers file: {config.NUMBERS_PATH}")
    print(f" Message file: {config.MESSAGE_PATH}")
    print("------------------------------------------")
    print(f" Local: http://127.0.0.1:{settings.port}/fetch")
    print(f" LAN:   http://{lan_ip}:{settings.port}/fetch?n=<count>")
    print("------------------------------------------")

    # werkzeug exits the process itself on a bind error, so check the port first
    try:
        config.check_port_available(config.HOST, settings.port)
    except OSError as e:
        logging.critical(f"Could not bind {config.HOST}:{settings.port}: {e}")
        return 1

    logging.info(f"Server listening on http://{config.HOST}:{settings.port}")
    app.run(host=config.HOST, port=settings.port, debug=False, use_reloader=False, threaded=True)
    return 0


if __name__ == '__main__':
    sys.exit(main())
