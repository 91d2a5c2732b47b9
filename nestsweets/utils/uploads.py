"""Image upload helpers."""

import os
import uuid
from flask import current_app
from werkzeug.utils import secure_filename


def allowed_file(filename):
    return '.' in filename and \
        filename.rsplit('.', 1)[1].lower() in current_app.config['ALLOWED_EXTENSIONS']


def save_upload(file, subfolder):
    """Save an uploaded image under UPLOAD_FOLDER/subfolder.

    Returns the static URL path, or None when no valid file was given.
    """
    if not file or not file.filename or not allowed_file(file.filename):
        return None
    filename = secure_filename(file.filename)
    filename = f'{uuid.uuid4().hex[:8]}_{filename}'
    folder = os.path.join(current_app.config['UPLOAD_FOLDER'], subfolder)
    os.makedirs(folder, exist_ok=True)
    file.save(os.path.join(folder, filename))
    return f'/static/uploads/{subfolder}/{filename}'
