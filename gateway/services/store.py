"""
In-memory, content-addressed document store.

Contents are stored as blobs keyed by their SHA-1. Every change creates a new
immutable :class:`Commit` whose ``tree`` maps paths to blob ids, so the full
version history of every note stays available for as long as the process runs.

The store is local-only. It is built with a :class:`Sync` capability, and the
only one provided, :class:`NoSync`, refuses every operation with
:class:`.SyncNotSupported`.
"""

import hashlib
import json
import threading
from datetime import datetime
from typing import Dict, List, NamedTuple, Optional

from pytz import UTC

from ..exceptions import SyncNotSupported


class Commit(NamedTuple):
    """One immutable version of the store."""

    commit_id: str
    parent: Optional[str]
    tree: Dict[str, str]
    author: str
    message: str
    timestamp: datetime

    def to_dict(self) -> dict:
        """Generate a JSON-friendly representation."""
        return {
            'commit_id': self.commit_id,
            'parent': self.parent,
            'paths': sorted(self.tree),
            'author': self.author,
            'message': self.message,
            'timestamp': self.timestamp.isoformat()
        }


class Sync(object):
    """Capability to exchange history with a remote store."""

    def fetch(self, remote: str) -> None:
        raise NotImplementedError('Implement in a subclass')

    def push(self, remote: str) -> None:
        raise NotImplementedError('Implement in a subclass')


class NoSync(Sync):
    """Sync capability for a store that must never be synchronized."""

    def fetch(self, remote: str) -> None:
        raise SyncNotSupported(f'Cannot fetch from {remote}: sync disabled')

    def push(self, remote: str) -> None:
        raise SyncNotSupported(f'Cannot push to {remote}: sync disabled')


def _hash(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


class MemoryStore(object):
    """
    Versioned store of text documents, keyed by path.

    All methods are safe to call from concurrent request threads; writers are
    serialized on a single lock.
    """

    def __init__(self, sync: Optional[Sync] = None) -> None:
        self._blobs: Dict[str, str] = {}
        self._commits: Dict[str, Commit] = {}
        self._head: Optional[str] = None
        self._lock = threading.RLock()
        self.sync = sync if sync is not None else NoSync()

    def head(self) -> Optional[Commit]:
        """Get the most recent commit, or ``None`` for an empty store."""
        with self._lock:
            if self._head is None:
                return None
            return self._commits[self._head]

    def _tree(self) -> Dict[str, str]:
        head = self.head()
        return dict(head.tree) if head is not None else {}

    def read(self, path: str) -> Optional[str]:
        """Get the current content at ``path``."""
        with self._lock:
            blob_id = self._tree().get(path)
            if blob_id is None:
                return None
            return self._blobs[blob_id]

    def list(self, prefix: str = '') -> List[str]:
        """List the paths that currently exist, optionally under ``prefix``."""
        with self._lock:
            return sorted(p for p in self._tree() if p.startswith(prefix))

    def write(self, path: str, content: str, author: str,
              message: str) -> Commit:
        """Store ``content`` at ``path`` as a new commit."""
        if not path:
            raise ValueError('Path must not be empty')
        blob_id = _hash(content.encode('utf-8'))
        with self._lock:
            self._blobs.setdefault(blob_id, content)
            tree = self._tree()
            tree[path] = blob_id
            return self._commit(tree, author, message)

    def remove(self, path: str, author: str, message: str) -> Commit:
        """Delete ``path`` as a new commit; ``KeyError`` if it is absent."""
        with self._lock:
            tree = self._tree()
            del tree[path]
            return self._commit(tree, author, message)

    def history(self, limit: Optional[int] = None) -> List[Commit]:
        """Get commits from newest to oldest."""
        commits = []
        with self._lock:
            commit_id = self._head
            while commit_id is not None:
                if limit is not None and len(commits) >= limit:
                    break
                commit = self._commits[commit_id]
                commits.append(commit)
                commit_id = commit.parent
        return commits

    def fetch(self, remote: str) -> None:
        """Pull history from ``remote``."""
        self.sync.fetch(remote)

    def push(self, remote: str) -> None:
        """Send history to ``remote``."""
        self.sync.push(remote)

    def _commit(self, tree: Dict[str, str], author: str,
                message: str) -> Commit:
        timestamp = datetime.now(tz=UTC)
        payload = json.dumps({
            'parent': self._head,
            'tree': tree,
            'author': author,
            'message': message,
            'timestamp': timestamp.isoformat()
        }, sort_keys=True)
        commit = Commit(
            commit_id=_hash(payload.encode('utf-8')),
            parent=self._head,
            tree=tree,
            author=author,
            message=message,
            timestamp=timestamp
        )
        self._commits[commit.commit_id] = commit
        self._head = commit.commit_id
        return commit
