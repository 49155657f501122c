# -*- coding: utf-8 -*-
"""
AttribDict class for respeval.

:copyright:
    The respeval Development Team
:license:
    GNU Lesser General Public License, Version 3
    (https://www.gnu.org/copyleft/lesser.html)
"""
import collections.abc
import copy
import warnings


class AttribDict(collections.abc.MutableMapping):
    """
    A dictionary whose items can also be accessed as attributes.

    Subclasses may declare class level ``defaults`` (values present on every
    instance), ``readonly`` keys, a ``_types`` mapping used to cast values on
    assignment and ``warn_on_non_default_key`` to get a warning whenever a
    key outside of ``defaults`` is set.

    :type data: dict, optional
    :param data: Dictionary with initial keywords.

    .. rubric:: Basic Usage

    >>> opts = AttribDict()
    >>> opts.tension = 500.0
    >>> opts['unwrap'] = True
    >>> print(opts.get('tension'))
    500.0
    >>> print(opts.unwrap)
    True
    """
    defaults = {}
    readonly = []
    warn_on_non_default_key = False
    _types = {}

    def __init__(self, *args, **kwargs):
        self.__dict__.update(copy.deepcopy(self.defaults))
        self.update(dict(*args, **kwargs))

    def __repr__(self):
        return "%s(%s)" % (self.__class__.__name__, self.__dict__)

    def __getitem__(self, name):
        try:
            return self.__dict__[name]
        except KeyError:
            if name in self.defaults:
                return self.defaults[name]
            raise

    def __setitem__(self, key, value):
        if key in self.readonly:
            msg = 'Attribute "%s" in %s object is read only!'
            raise AttributeError(msg % (key, self.__class__.__name__))
        if self.warn_on_non_default_key and key not in self.defaults:
            msg = ('Setting attribute "{}" which is not a default '
                   'attribute ("{}").').format(
                key, '", "'.join(self.defaults.keys()))
            warnings.warn(msg)
        if key in self._types and not isinstance(value, self._types[key]):
            value = self._cast_type(key, value)
        self.__dict__[key] = value

    def __delitem__(self, name):
        del self.__dict__[name]

    def __getattr__(self, name):
        # hasattr() expects an AttributeError, not a KeyError
        try:
            return self.__getitem__(name)
        except KeyError as e:
            raise AttributeError(e.args[0])

    __setattr__ = __setitem__
    __delattr__ = __delitem__

    def copy(self):
        return copy.deepcopy(self)

    def update(self, adict={}):
        for (key, value) in adict.items():
            if key in self.readonly:
                continue
            self.__setitem__(key, value)

    def _cast_type(self, key, value):
        """
        Cast value to the type registered for key in ``_types``.
        """
        typ = self._types[key]
        new_type = (
            typ[0] if isinstance(typ, collections.abc.Sequence) else typ)
        msg = ('Attribute "%s" must be of type %s, not %s. Attempting to '
               'cast %s to %s') % (key, typ, type(value), value, new_type)
        warnings.warn(msg)
        return new_type(value)

    def __iter__(self):
        return iter(self.__dict__)

    def __len__(self):
        return len(self.__dict__)


if __name__ == '__main__':
    import doctest
    doctest.testmod(exclude_empty=True)
