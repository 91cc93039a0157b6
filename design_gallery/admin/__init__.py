from flask import Blueprint

admin_bp = Blueprint("admin", __name__, url_prefix="/api/admin")

# route modules register themselves on admin_bp
from . import routes            # dashboard + designs + images
from . import category_routes   # categories
from . import upload_routes     # cover image upload
