# -*- coding: utf-8 -*-
import warnings

from respeval.core.util import AttribDict
import pytest


class DefaultTestAttribDict(AttribDict):
    defaults = {'test': 1}


class TestAttribDict:
    """
    Test suite for respeval.core.util.attribdict
    """

    def test_pop(self):
        """
        Tests pop method of AttribDict class.
        """
        ad = AttribDict()
        ad.test = 1
        ad['test2'] = 'test'
        # removing via pop
        temp = ad.pop('test')
        assert temp == 1
        assert not ('test' in ad)
        assert 'test2' in ad
        assert not ('test' in ad.__dict__)
        assert 'test2' in ad.__dict__
        assert not hasattr(ad, 'test')
        assert hasattr(ad, 'test2')
        # using pop() for not existing element raises a KeyError
        with pytest.raises(KeyError):
            ad.pop('test')

    def test_delete(self):
        """
        Tests delete method of AttribDict class.
        """
        ad = AttribDict()
        ad.test = 1
        ad['test2'] = 'test'
        # deleting test using dictionary
        del ad['test']
        assert not ('test' in ad)
        assert 'test2' in ad
        assert not hasattr(ad, 'test')
        # deleting test2 using attribute
        del ad.test2
        assert not ('test2' in ad)
        assert not hasattr(ad, 'test2')

    def test_init(self):
        """
        Tests initialization of AttribDict class.
        """
        ad = AttribDict({'test': 'NEW'})
        assert ad['test'] == 'NEW'
        assert ad.test == 'NEW'
        assert ad.get('test') == 'NEW'
        assert ad.__getattr__('test') == 'NEW'
        assert ad.__getitem__('test') == 'NEW'
        assert ad.__dict__['test'] == 'NEW'
        assert 'test' in ad
        assert 'test' in ad.__dict__

    def test_defaults(self):
        """
        Tests default of __getitem__/__getattr__ methods of AttribDict class.
        """
        ad = DefaultTestAttribDict()
        assert ad['test'] == 1
        assert ad.test == 1
        # not existing keys raise the matching errors
        with pytest.raises(KeyError):
            ad['xyz']
        with pytest.raises(AttributeError):
            ad.xyz
        # defaults are copied, changing an instance leaves the class alone
        ad.test = 2
        assert DefaultTestAttribDict().test == 1

    def test_copy(self):
        """
        Tests copy method of AttribDict class.
        """
        ad = DefaultTestAttribDict(test=[1, 2])
        ad2 = ad.copy()
        ad2.test.append(3)
        assert ad.test == [1, 2]
        assert ad2.test == [1, 2, 3]
        assert isinstance(ad2, DefaultTestAttribDict)

    def test_readonly(self):
        class ReadOnlyAttribDict(AttribDict):
            readonly = ['fixed']

        ad = ReadOnlyAttribDict()
        with pytest.raises(AttributeError, match='read only'):
            ad.fixed = 1
        # update silently skips read only keys
        ad.update({'fixed': 1, 'other': 2})
        assert 'fixed' not in ad
        assert ad.other == 2

    def test_types(self):
        """
        Values not matching the registered type are cast with a warning.
        """
        class TypedAttribDict(AttribDict):
            _types = {'number': (float, int), 'flag': bool}

        ad = TypedAttribDict()
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            ad.number = 3
            ad.flag = True
        assert len(w) == 0
        assert ad.number == 3
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            ad.number = '2.5'
            ad.flag = 1
        assert len(w) == 2
        assert ad.number == 2.5
        assert isinstance(ad.number, float)
        assert ad.flag is True
        with pytest.raises(ValueError):
            with warnings.catch_warnings():
                warnings.simplefilter('ignore')
                ad.number = 'abc'

    def test_warn_on_non_default_key(self):
        class WarningAttribDict(AttribDict):
            defaults = {'a': 1}
            warn_on_non_default_key = True

        ad = WarningAttribDict()
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            ad.a = 2
        assert len(w) == 0
        with warnings.catch_warnings(record=True) as w:
            warnings.simplefilter('always')
            ad.b = 2
        assert len(w) == 1
        assert 'not a default attribute' in str(w[0].message)
        assert ad.b == 2

    def test_len_and_iter(self):
        ad = AttribDict(a=1, b=2)
        assert len(ad) == 2
        assert sorted(ad) == ['a', 'b']
        assert dict(ad) == {'a': 1, 'b': 2}
