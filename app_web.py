from flask import Flask, request, jsonify, current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.exceptions import HTTPException
import logging

import config
from models import GuestStore
from validation import GuestInputError, parse_guest_id, parse_guest_input

# --- Logging Configuration ---
logging.basicConfig(level=config.LOG_LEVEL,
                    format='%(asctime)s - %(levelname)s - %(message)s')

NOT_FOUND = {'message': 'guest not found'}


def get_store():
    return current_app.extensions['guest_store']


def read_json_body():
    # Any content type is accepted; None means the body did not parse
    return request.get_json(force=True, silent=True)


# --- Routes ---
def list_guests():
    return jsonify(get_store().list_guests())


def get_guest(guest_id):
    guestid = parse_guest_id(guest_id)
    guest = get_store().get_guest(guestid)
    if guest is None:
        return jsonify(NOT_FOUND), 404
    return jsonify(guest)


def create_guest():
    data = parse_guest_input(read_json_body(), allow_id=True)

    try:
        created = get_store().create_guest(
            name=data.name,
            phone=data.phone,
            email=data.email,
            address=data.address,
            guestid=data.guestid,
        )
    except IntegrityError as e:
        current_app.logger.warning(f"Rejected duplicate guestid {data.guestid}: {e.orig}")
        return jsonify(message='guestid already exists'), 409

    current_app.logger.info(f"Created guest {created['guestid']}")
    return jsonify(created), 201


def replace_guest(guest_id):
    guestid = parse_guest_id(guest_id)
    store = get_store()

    if store.get_guest(guestid) is None:
        return jsonify(NOT_FOUND), 404

    data = parse_guest_input(read_json_body())

    updated = store.replace_guest(
        guestid,
        name=data.name,
        phone=data.phone,
        email=data.email,
        address=data.address,
    )
    if updated is None:
        # removed between the lookup and the update
        return jsonify(NOT_FOUND), 404

    current_app.logger.info(f"Replaced guest {guestid}")
    return jsonify(updated)


def delete_guest(guest_id):
    guestid = parse_guest_id(guest_id)
    if get_store().delete_guest(guestid) == 0:
        return jsonify(NOT_FOUND), 404

    current_app.logger.info(f"Deleted guest {guestid}")
    return jsonify(message='deleted')


# --- Error Handlers ---
def handle_input_error(e):
    return jsonify(e.to_dict()), 400


def handle_db_error(e):
    current_app.logger.error(f"Database error on {request.method} {request.path}: {e}", exc_info=True)
    return jsonify(message='internal error', error=str(e)), 500


def handle_http_error(e):
    return jsonify(message=e.description), e.code


def register_routes(app):
    app.add_url_rule('/api/guests', 'list_guests', list_guests, methods=['GET'])
    app.add_url_rule('/api/guests', 'create_guest', create_guest, methods=['POST'])
    app.add_url_rule('/api/guests/<guest_id>', 'get_guest', get_guest, methods=['GET'])
    app.add_url_rule('/api/guests/<guest_id>', 'replace_guest', replace_guest, methods=['PUT'])
    app.add_url_rule('/api/guests/<guest_id>', 'delete_guest', delete_guest, methods=['DELETE'])

    app.register_error_handler(GuestInputError, handle_input_error)
    app.register_error_handler(SQLAlchemyError, handle_db_error)
    app.register_error_handler(HTTPException, handle_http_error)


# --- Flask Application Initialization ---
def create_app(test_config=None, store=None):
    """Builds the Guest API.

    test_config overrides entries such as DATABASE_URL. Passing a ready
    GuestStore skips opening the configured database.
    """
    app = Flask(__name__)
    app.config['DATABASE_URL'] = config.DATABASE_URL
    if test_config:
        app.config.update(test_config)

    if store is None:
        store = GuestStore(app.config['DATABASE_URL'])
        logging.info(f"Using database: {app.config['DATABASE_URL']}")
    app.extensions['guest_store'] = store

    register_routes(app)
    return app


if __name__ == '__main__':
    app = create_app()
    logging.info(f"Guest API running at http://localhost:{config.PORT}")
    app.run(debug=False, host=config.HOST, port=config.PORT)
