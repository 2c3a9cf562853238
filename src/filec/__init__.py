"""filec -- a persistent clipboard for filesystem paths.

Queue files with one command, copy or move them somewhere with another.

Core modules:
    resolve     -- Canonical path resolution (absolute, symlinks followed, must
                   exist). The canonical path is the dedup key for entries.
    store       -- ClipboardStore/ClipboardHandle: the clipboard text file, one
                   path per line, opened and exclusively locked per operation.
    concurrency -- Non-blocking flock/msvcrt locking returning a tagged
                   LockAttempt (acquired, held_by_other, io_error).
    runner      -- ClipboardRunner: one store per invocation, routes commands.
    config      -- FilecConfig via pydantic-settings (FILEC_* env vars), default
                   clipboard location via platformdirs, loguru setup.
    cli         -- Click group entry point: add, copy/cp, move/mv, list/ls, clear.
    errors      -- Exception hierarchy and exit code mapping.
    models      -- Enums and result dataclasses.

Subpackages:
    ops -- Clipboard operations (add, copy/move transfer engine)
"""
