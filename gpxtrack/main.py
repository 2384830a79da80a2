#!/usr/bin/env python3
"""
gpxtrack - GPX trackpoint extraction service
Web endpoint that accepts GPX uploads and returns their validated trackpoints.
"""

import os
import time
import uuid
from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.utils import secure_filename

from gpxtrack.utils.errors import LoadError
from gpxtrack.utils.file_loader import MAX_FILE_SIZE
from gpxtrack.utils.gpx_loader import load_gpx_file
from gpxtrack.utils.app_config import (
    get_cors_origins,
    get_debug_enabled,
    get_lenient_numbers,
    get_upload_folder,
    get_upload_ttl_seconds,
)

app = Flask(__name__)
CORS(app, resources={r"/api/*": {"origins": get_cors_origins()}})

# Configuration
ALLOWED_EXTENSIONS = {'gpx'}

app.config['UPLOAD_FOLDER'] = get_upload_folder()
# Leave room for the multipart envelope around a maximum-size file.
app.config['MAX_CONTENT_LENGTH'] = MAX_FILE_SIZE + 64 * 1024

os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)


def cleanup_old_files(directory, max_age_seconds):
    """Remove files older than `max_age_seconds` from a directory."""
    now = time.time()
    try:
        for entry in os.scandir(directory):
            if not entry.is_file(follow_symlinks=False):
                continue
            age = now - entry.stat(follow_symlinks=False).st_mtime
            if age > max_age_seconds:
                os.remove(entry.path)
    except OSError as e:
        print(f"[WARN] Cleanup failed for {directory}: {e}")


def build_unique_path(directory, original_filename, required_ext):
    """Build unique storage path while preserving user-facing file name."""
    sanitized = secure_filename(original_filename) or f"track.{required_ext}"
    if not sanitized.endswith(f".{required_ext}"):
        sanitized = f"{sanitized}.{required_ext}"
    stem = sanitized[:-(len(required_ext) + 1)]
    unique_name = f"{stem}_{uuid.uuid4().hex[:10]}.{required_ext}"
    return sanitized, os.path.join(directory, unique_name)


def allowed_file(filename):
    """Check if file has allowed extension."""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


@app.route('/api/upload', methods=['POST'])
def upload_gpx():
    """Handle GPX file upload and return its trackpoints."""
    try:
        cleanup_old_files(app.config['UPLOAD_FOLDER'], get_upload_ttl_seconds())
        if 'file' not in request.files:
            return jsonify({'error': 'No file provided'}), 400

        file = request.files['file']
        if file.filename == '':
            return jsonify({'error': 'No file selected'}), 400

        if not allowed_file(file.filename):
            return jsonify({'error': 'Invalid file type. Only GPX files allowed'}), 400

        filename, filepath = build_unique_path(app.config['UPLOAD_FOLDER'], file.filename, 'gpx')
        file.save(filepath)
        events = []
        try:
            t_start = time.time()
            collection = load_gpx_file(
                filepath,
                progress=lambda event: events.append(event.to_dict()),
                lenient=get_lenient_numbers(),
            )
            print(f"[PERF] Loaded {len(collection)} trackpoints in {time.time() - t_start:.3f}s")
        finally:
            # The upload is only needed for immediate parsing.
            if os.path.exists(filepath):
                os.remove(filepath)

        return jsonify({
            'success': True,
            'filename': filename,
            'data': collection.to_dict(),
            'progress': events,
        })

    except RequestEntityTooLarge:
        return jsonify({'error': 'File too large', 'kind': 'resource_limit'}), 413
    except LoadError as e:
        print(f"[WARN] Rejected upload: {e.message}")
        return jsonify({'error': e.message, 'kind': e.kind.value}), 400
    except Exception as e:
        import traceback
        print(f"[ERROR] /api/upload failed: {str(e)}")
        traceback.print_exc()
        return jsonify({'error': str(e)}), 500


@app.route('/api/health', methods=['GET'])
def health():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'service': 'gpxtrack'
    })


if __name__ == '__main__':
    app.run(host='127.0.0.1', port=5001, debug=get_debug_enabled())
