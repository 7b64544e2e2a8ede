from contextlib import contextmanager
import logging
import os
import re
from tempfile import NamedTemporaryFile
from typing import get_args, get_origin, Union


logger = logging.getLogger(__name__)


_ENV_VAR_TOKEN_RE = re.compile(r"\$\{|(?P<varname>[A-Za-z_][A-Za-z0-9_]*)|.")


class SubstitutionError(Exception):
    pass


def _substitute_env_vars(itr, outer=True):
    result = ""
    while True:
        m = next(itr, None)
        if m is None:
            if not outer:
                raise SubstitutionError("unclosed variable reference")
            return result
        elif m.group(0) == "${":
            m = next(itr, None)
            if m is None:
                raise SubstitutionError("unclosed variable reference")
            elif m.group('varname'):
                varname = m.group(0)
                m = next(itr, None)
                if m is None:
                    raise SubstitutionError("unclosed variable reference")
                elif m.group(0) == ":":
                    fallback = _substitute_env_vars(itr, outer=False)
                    result += os.environ.get(varname, fallback)
                elif m.group(0) == "}":
                    try:
                        result += os.environ[varname]
                    except KeyError:
                        raise SubstitutionError(
                            "environment variable {} is not set".format(varname)) from None
                else:
                    raise SubstitutionError(
                        "at position {} in field: expected : or }}".format(m.start()))
            else:
                raise SubstitutionError(
                    "at position {} in field: expected variable name".format(m.start()))
        elif m.group(0) == "}" and not outer:
            return result
        else:
            result += m.group(0)


def substitute_env_vars(val):
    return _substitute_env_vars(_ENV_VAR_TOKEN_RE.finditer(val))


def resolve_type(type_):
    """Split a type annotation into (type, optional), unwrapping Optional[X]"""
    if get_origin(type_) is Union:
        args = get_args(type_)
        non_none = [a for a in args if a is not type(None)]
        if len(non_none) == 1:
            return non_none[0], len(args) > 1

    return type_, False


@contextmanager
def atomic_writer(output_path):
    """Write a file in binary mode, replacing output_path only on success.

    If the body of the with statement raises, any existing file at
    output_path is left as it was.
    """
    output_dir = os.path.dirname(output_path)
    tmpfile = NamedTemporaryFile(delete=False,
                                 dir=output_dir,
                                 prefix=os.path.basename(output_path))
    success = False
    try:
        yield tmpfile
        tmpfile.close()

        # Always replace, even if unchanged: the modification time is
        # what marks the file as fresh
        os.chmod(tmpfile.name, 0o644)
        os.replace(tmpfile.name, output_path)
        logger.info("Wrote %s", output_path)

        success = True
    finally:
        if not success:
            tmpfile.close()
            os.unlink(tmpfile.name)
