r"""@package symdiff.utils

Helpers for splitting argument lists, evaluating in parallel and storing
objects on disk.
"""

from tempfile import NamedTemporaryFile
from contextlib import contextmanager
import os
import os.path as op
import time

import numpy as np


__all__ = [
    "split",
    "available_cpus",
    "parallel_compute",
    "process_pool",
    "save_to_file",
    "load_from_file",
]


def split(sequence, k):
    r"""Split an ordered sequence into the prefix `[0, k)` and the suffix `[k, n)`.

    Both parts are returned as tuples. If `k` exceeds the length of the
    sequence, the suffix is empty. NumPy arrays are split along their first
    axis and the parts stay arrays.

    @b Examples

    ```
        >>> split([1, 2, 3, 4], 1)
        ((1,), (2, 3, 4))
        >>> split((1, 2), 5)
        ((1, 2), ())
    ```
    """
    if k < 0:
        raise ValueError("Split position must be non-negative, got %r." % k)
    if isinstance(sequence, np.ndarray):
        return sequence[:k], sequence[k:]
    sequence = tuple(sequence)
    return sequence[:k], sequence[k:]


def available_cpus():
    r"""Number of CPUs this process may run on."""
    try:
        return len(os.sched_getaffinity(0))
    except AttributeError:
        return os.cpu_count() or 1


def parallel_compute(func, arg_list, processes=None, pool=None):
    r"""Call `func` once for each element of `arg_list`, using several processes.

    This is multiprocessing, not multithreading, so `func` and all arguments
    must be picklable. The results are returned in the order of `arg_list`.

    @param func
        Callable taking one element of `arg_list` as its only argument.
    @param arg_list
        Iterable of arguments.
    @param processes
        Number of processes to use. By default, all available CPUs are used.
        With one process (or at most one argument), everything is computed in
        the current process.
    @param pool
        Optional `multiprocessing` pool to re-use.
    """
    arg_list = list(arg_list)
    if processes is None:
        processes = available_cpus()
    if processes <= 1 or len(arg_list) <= 1:
        return [func(arg) for arg in arg_list]
    chunksize = -(-len(arg_list) // processes)
    with process_pool(processes=processes, pool=pool) as p:
        return p.map(func, arg_list, chunksize=chunksize)


@contextmanager
def process_pool(processes=None, pool=None):
    r"""Context creating a process pool and terminating it afterwards.

    If `pool` is given, it is returned unchanged and not terminated.
    """
    if pool is not None:
        yield pool
        return
    from multiprocessing import Pool
    with Pool(processes=processes or available_cpus()) as p:
        yield p


def _npy_name(filename):
    filename = op.expanduser(filename)
    if not filename.endswith('.npy'):
        filename += '.npy'
    return filename


def save_to_file(filename, data, overwrite=False, verbose=True,
                 showname='data', mkpath=True):
    r"""Store an object in a NumPy ``.npy`` file.

    The object is wrapped in a 1-element object array (to avoid
    0-dimensional arrays) and pickled by `numpy.save()`. It is first written
    to a temporary file next to the target, which then replaces the target,
    so a failure while writing leaves an existing file intact.

    @param filename
        Target file. The extension ``'.npy'`` is added if missing.
    @param data
        The (picklable) object to store.
    @param overwrite
        Whether an existing file may be replaced. If `False` (default), a
        `RuntimeError` is raised instead. The check is repeated right
        before the rename, but a file created by another process in between
        may still be replaced.
    @param verbose
        Whether to print the file name after saving. Default is `True`.
    @param showname
        Name of the object in the printed message.
    @param mkpath
        Whether to create missing parent folders. Default is `True`.
    """
    filename = _npy_name(filename)
    folder = op.dirname(op.abspath(filename))
    if mkpath:
        os.makedirs(folder, exist_ok=True)
    if not overwrite and op.exists(filename):
        raise RuntimeError("File already exists: %s" % filename)
    container = np.empty(1, dtype=object)
    container[0] = data
    with NamedTemporaryFile(dir=folder, suffix='.npy', delete=False) as tmp:
        tmpname = tmp.name
    try:
        np.save(tmpname, container)
        if not overwrite and op.exists(filename):
            raise RuntimeError("File already exists: %s" % filename)
        os.replace(tmpname, filename)
    except BaseException:
        if op.exists(tmpname):
            os.unlink(tmpname)
        raise
    if verbose:
        print("%s saved to: %s" % (showname, filename))


def load_from_file(filename, retries=0, sleep=5, verbose=False):
    r"""Load an object stored by save_to_file().

    @param filename
        The file to read.
    @param retries
        How often to retry if reading fails, e.g. because another process is
        just writing the file. Default is `0`.
    @param sleep
        Seconds to wait between attempts.
    @param verbose
        Whether to print a message on failed attempts.
    """
    filename = op.expanduser(filename)
    attempt = 0
    while True:
        try:
            result = np.load(filename, allow_pickle=True)
            break
        except OSError as e:
            if attempt >= retries:
                raise
            attempt += 1
            if verbose:
                print("Could not load %s (%s), retrying in %ss" % (filename, e, sleep))
            time.sleep(sleep)
    if result.shape == (1,):
        return result[0]
    return result
