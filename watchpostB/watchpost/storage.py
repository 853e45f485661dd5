"""Surveillance video blobs, namespaced by the uploading principal."""
import logging
import os
import posixpath

from django.conf import settings
from django.core.files.storage import default_storage
from django.urls import reverse
from django.utils import timezone

logger = logging.getLogger(__name__)


def video_path(owner_id, filename):
    return posixpath.join(settings.WATCHPOST_VIDEO_PREFIX, str(owner_id), filename)


def upload_surveillance_video(owner, upload):
    """Store ``upload`` for ``owner`` and return the URL it can be fetched from.

    Returns None when the storage backend fails, so callers can carry on
    without the video.
    """
    ext = os.path.splitext(upload.name)[1].lower() or '.mp4'
    filename = f"{int(timezone.now().timestamp() * 1000)}{ext}"

    try:
        stored_name = default_storage.save(video_path(owner.pk, filename), upload)
    except Exception as e:
        logger.error(f"Error uploading video for {owner.pk}: {str(e)}")
        return None

    logger.info(f"Stored surveillance video {stored_name} ({upload.size} bytes)")
    return reverse('surveillance-video', kwargs={
        'owner_id': owner.pk,
        'filename': posixpath.basename(stored_name),
    })


def open_surveillance_video(owner_id, filename):
    """Open a stored video, or return None when it does not exist."""
    name = video_path(owner_id, posixpath.basename(filename))
    if not default_storage.exists(name):
        return None
    return default_storage.open(name, 'rb')
