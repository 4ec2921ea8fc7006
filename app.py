import os
import logging

from dotenv import load_dotenv
from flask import Flask, Response, request, jsonify, render_template
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from billing.currency import currency_choices
from billing.logo import LogoError, logo_from_bytes, logo_from_url
from billing.models import ItemNotFound
from billing.parser import DocumentParser
from billing.storage import JsonFileStore
from billing.workspace import BillWorkspace

load_dotenv()

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)

# Configuration
BILL_STORE_PATH = os.getenv("BILL_STORE_PATH", "bill_store.json")
DEFAULT_TEMPLATE = os.getenv("DEFAULT_TEMPLATE", "modern")
LOGO_MAX_SIZE = int(os.getenv("LOGO_MAX_SIZE", "256"))
LOGO_TIMEOUT = int(os.getenv("LOGO_TIMEOUT", "30"))
# Allowed logo domains (comma-separated, empty means allow all public URLs)
ALLOWED_DOMAINS = os.getenv("ALLOWED_DOMAINS", "").split(",") if os.getenv("ALLOWED_DOMAINS") else []

workspace = BillWorkspace(
    JsonFileStore(BILL_STORE_PATH),
    default_template=DEFAULT_TEMPLATE,
)


def error_response(message, status):
    return jsonify({
        "is_success": False,
        "error": message,
    }), status


def success_response(data, status=200):
    return jsonify({
        "is_success": True,
        "data": data,
    }), status


def bill_payload(document):
    """Document plus its unrounded totals."""
    return {
        "bill": document.to_dict(),
        "totals": document.totals().to_dict(),
    }


def request_json():
    """Return the JSON body, or an empty object when there is none."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


@app.errorhandler(ValueError)
def handle_value_error(e):
    return error_response(str(e), 400)


@app.errorhandler(LogoError)
def handle_logo_error(e):
    return error_response(str(e), 422)


@app.errorhandler(ItemNotFound)
def handle_missing_item(e):
    return error_response(f"Line item not found: {e.args[0]}", 404)


@app.errorhandler(Exception)
def handle_unexpected_error(e):
    if isinstance(e, HTTPException):
        return error_response(e.description, e.code)
    logger.exception("Unhandled error")
    return error_response(str(e), 500)


@app.route('/bill', methods=['GET'])
def get_bill():
    """Return the live bill and its totals."""
    return success_response(bill_payload(workspace.document))


@app.route('/bill', methods=['PUT'])
def replace_bill():
    """Replace the live bill with the request body."""
    data = request.get_json(silent=True)
    if data is None:
        return error_response("Request body must be a JSON object", 400)
    document = DocumentParser(workspace.clock()).parse_from_dict(data)
    return success_response(bill_payload(workspace.replace(document)))


@app.route('/bill/new', methods=['POST'])
def new_bill():
    """Start the next bill from the live one."""
    return success_response(bill_payload(workspace.new_bill()))


@app.route('/bill/reset', methods=['POST'])
def reset_bill():
    """Replace the live bill with the default bill."""
    return success_response(bill_payload(workspace.reset()))


@app.route('/bill/items', methods=['POST'])
def add_item():
    """Append a line item; a blank one when the body is empty."""
    data = request_json()
    parser = DocumentParser()
    item = parser.parse_item(data) if data else None
    document = workspace.edit(lambda doc: doc.add_item(item))
    payload = bill_payload(document)
    payload["item"] = document.items[-1].to_dict()
    return success_response(payload, 201)


@app.route('/bill/items/<item_id>', methods=['PATCH'])
def update_item(item_id):
    """Change description, quantity or rate of one line item."""
    changes = DocumentParser().parse_item_changes(request_json())
    document = workspace.edit(lambda doc: doc.update_item(item_id, **changes))
    payload = bill_payload(document)
    payload["item"] = document.get_item(item_id).to_dict()
    return success_response(payload)


@app.route('/bill/items/<item_id>', methods=['DELETE'])
def remove_item(item_id):
    document = workspace.edit(lambda doc: doc.remove_item(item_id))
    return success_response(bill_payload(document))


@app.route('/bill/items/<item_id>/duplicate', methods=['POST'])
def duplicate_item(item_id):
    document = workspace.edit(lambda doc: doc.duplicate_item(item_id))
    payload = bill_payload(document)
    payload["item"] = document.items[-1].to_dict()
    return success_response(payload, 201)


@app.route('/bill/logo', methods=['PUT'])
def set_logo():
    """Set the company logo from an uploaded file or a JSON ``url``."""
    upload = request.files.get('file')
    if upload is not None:
        logo = logo_from_bytes(upload.read(), LOGO_MAX_SIZE)
    else:
        url = request_json().get('url')
        if not url:
            return error_response("Provide a 'file' upload or a 'url'", 400)
        logo = logo_from_url(
            url,
            allowed_domains=ALLOWED_DOMAINS,
            max_size=LOGO_MAX_SIZE,
            timeout=LOGO_TIMEOUT,
        )
    document = workspace.edit(lambda doc: doc.with_company(logo=logo))
    return success_response(bill_payload(document))


@app.route('/bill/logo', methods=['DELETE'])
def remove_logo():
    document = workspace.edit(lambda doc: doc.with_company(logo=None))
    return success_response(bill_payload(document))


@app.route('/bill/summary', methods=['GET'])
def bill_summary():
    """Live totals card, as JSON or as plain text with ``?format=text``."""
    if request.args.get('format') == 'text':
        text = workspace.summarizer.get_formatted_summary(workspace.document)
        return Response(text, mimetype='text/plain')
    return success_response(workspace.summary().to_dict())


@app.route('/templates', methods=['GET'])
def list_templates():
    selected = workspace.selected_template
    templates = [
        dict(template, selected=template["id"] == selected)
        for template in workspace.templates.available()
    ]
    return success_response(templates)


@app.route('/template', methods=['GET'])
def get_template():
    return success_response({"template": workspace.selected_template})


@app.route('/template', methods=['PUT'])
def select_template():
    variant_id = request_json().get('template')
    if not variant_id:
        return error_response("Missing 'template' field in request body", 400)
    return success_response({"template": workspace.select_template(variant_id)})


@app.route('/bill/render', methods=['GET'])
def render_bill():
    """Layout tree of the live bill."""
    rendered = workspace.render(request.args.get('template'))
    return success_response(rendered.to_dict())


@app.route('/bill/render.html', methods=['GET'])
def render_bill_html():
    """Static HTML capture of the live bill, for printing."""
    rendered = workspace.render(request.args.get('template'))
    return render_template('bill.html', bill=rendered.to_dict())


@app.route('/currencies', methods=['GET'])
def list_currencies():
    return success_response(currency_choices())


@app.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return jsonify({"status": "healthy"}), 200


if __name__ == '__main__':
    port = int(os.getenv('PORT', 5001))
    app.run(host='0.0.0.0', port=port, debug=os.getenv('DEBUG', 'False').lower() == 'true')
