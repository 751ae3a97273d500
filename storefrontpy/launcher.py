"""Native client launching."""

import hashlib
import os
import shutil
import subprocess
import tempfile
import time
from datetime import datetime
from logging import getLogger

LOGGER = getLogger(__name__)

DESCRIPTOR_EXTENSION = ".ica"
CLIENT_EXECUTABLES = ("wfica", "wfica.sh", "selfservice")


def descriptor_file_prefix(launch_reference):
    """File name prefix derived from the launch reference and the time."""
    seed = f"{launch_reference}{datetime.now().isoformat()}".encode()
    return hashlib.sha1(seed).hexdigest()[:16] + "-"


def write_descriptor(content, launch_reference, path=None):
    """Write a descriptor readable by the user only, returns its path.

    The descriptor carries session tickets. Without ``path`` it goes to a
    new file in the temp directory.
    """
    if path:
        handle = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    else:
        handle, path = tempfile.mkstemp(
            suffix=DESCRIPTOR_EXTENSION,
            prefix=descriptor_file_prefix(launch_reference),
        )
    with os.fdopen(handle, "w") as f:
        f.write(content)
    LOGGER.debug("Descriptor written to %s", path)
    return path


def find_client(client_path=None):
    """Path of the native client, or None if it cannot be found."""
    if client_path and os.path.isfile(client_path):
        return client_path
    for executable in CLIENT_EXECUTABLES:
        found = shutil.which(executable)
        if found:
            return found
    return None


def launch(descriptor_path, client_path=None, cleanup_delay=1.0):
    """Start the native client on a descriptor and remove the descriptor.

    The client forks and exits, but still reads the file shortly after,
    hence the delay before it is deleted. The descriptor is removed even
    when no client could be started.
    """
    if not os.path.isfile(descriptor_path):
        LOGGER.warning("Descriptor %s does not exist", descriptor_path)
        return False

    try:
        client = find_client(client_path)
        if client is None:
            LOGGER.warning("No native client found to open %s", descriptor_path)
            return False

        LOGGER.info("Starting %s %s", client, descriptor_path)
        process = subprocess.Popen([client, descriptor_path])  # pylint: disable=consider-using-with
        time.sleep(cleanup_delay)
        # reap the client if it already handed over to its own processes
        process.poll()
        return True
    finally:
        os.remove(descriptor_path)
