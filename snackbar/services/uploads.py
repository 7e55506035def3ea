"""
Upload Store

Writes uploaded media under the public static directory and returns the
relative reference stored in ``image`` columns.
"""

import logging
import os
import time

from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'upload_store'


class UploadStore:
    """Saves bytes as ``<millis>-<original name>`` inside ``directory``."""

    def __init__(self, directory, url_prefix='uploads'):
        self.directory = directory
        self.url_prefix = url_prefix
        os.makedirs(directory, exist_ok=True)

    def _target_name(self, original_name):
        safe_name = secure_filename(original_name or '') or 'upload'
        stamp = int(time.time() * 1000)
        name = f'{stamp}-{safe_name}'
        while os.path.exists(os.path.join(self.directory, name)):
            stamp += 1
            name = f'{stamp}-{safe_name}'
        return name

    def save(self, data, original_name):
        """Store ``data`` and return its reference, e.g. ``uploads/1700000000000-foto.jpg``."""
        name = self._target_name(original_name)
        with open(os.path.join(self.directory, name), 'wb') as fh:
            fh.write(data)
        logger.info('Stored upload %s (%d bytes)', name, len(data))
        return f'{self.url_prefix}/{name}'

    def save_file(self, file_storage):
        """Store a werkzeug ``FileStorage``; None when the form sent no file."""
        if file_storage is None or not file_storage.filename:
            return None
        return self.save(file_storage.read(), file_storage.filename)

    def delete(self, reference):
        """Remove a stored upload by the reference ``save`` returned; missing files are ignored."""
        if not reference:
            return
        name = os.path.basename(reference)
        try:
            os.remove(os.path.join(self.directory, name))
        except FileNotFoundError:
            return
        logger.info('Removed upload %s', name)
