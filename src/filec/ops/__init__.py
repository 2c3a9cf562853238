"""Clipboard operations.

Submodules:
    add      -- Canonicalize inputs, dedup against the stored set and append
                only new paths. Unresolvable inputs are logged and skipped;
                raises NoNewFilesError when nothing new is left to queue.
    transfer -- Copy/move engine. Per-item move (plain rename) and copy
                (recursive for directories, flattening nested failures) that
                return failure lists instead of raising. execute() runs the
                whole queued set continue-on-error under the clipboard lock,
                then clears the clipboard or overwrites it with the failed
                queued paths and raises PartialFailure.
"""
