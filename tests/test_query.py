"""Test query string construction"""

import pytest

from applemusic.api.query import QueryString, join_values


class TestQueryString:
    """Test QueryString rendering"""

    def test_include_is_always_emitted(self):
        assert QueryString().add_include('').render() == 'include='
        assert QueryString().add_include().build('storefronts') == 'storefronts?include='

    def test_include_list_is_comma_joined(self):
        assert QueryString().add_include(['tracks', 'artists']).render() == 'include=tracks,artists'

    @pytest.mark.parametrize('limit,expected', [(5, '5'), (100, '100'), (101, '100'), (1000, '100')])
    def test_page_limit_is_clamped_to_ceiling(self, limit, expected):
        query = QueryString().add_page(limit, 40, ceiling=100)
        assert query.render() == f'offset=40&limit={expected}'

    def test_page_without_ceiling_is_passed_through(self):
        assert QueryString().add_page(500, 0).render() == 'offset=0&limit=500'

    def test_bracket_keys_stay_literal(self):
        query = QueryString().add('ids[songs]', '1,2').add('filter[upc]', '00602537869777')
        assert query.render() == 'ids[songs]=1,2&filter[upc]=00602537869777'

    def test_values_are_encoded(self):
        assert QueryString().add('term', 'ac dc&co').render() == 'term=ac%20dc%26co'

    def test_plus_separated_term_is_kept(self):
        assert QueryString().add('term', 'james+brown').render() == 'term=james+brown'

    def test_none_is_skipped(self):
        assert QueryString().add('genre', None).build('catalog/us/charts') == 'catalog/us/charts'

    def test_add_if_skips_empty_values(self):
        query = QueryString().add_if('genre', '').add_if('types', [])
        assert len(query) == 0
        assert QueryString().add_if('genre', '20').render() == 'genre=20'

    def test_insertion_order_is_kept(self):
        query = QueryString().add('b', '1').add('a', '2').add_include('x')
        assert str(query) == 'b=1&a=2&include=x'


class TestJoinValues:
    """Test value normalization"""

    def test_join_values(self):
        assert join_values(None) == ''
        assert join_values('songs') == 'songs'
        assert join_values(7) == '7'
        assert join_values(('albums', 'songs')) == 'albums,songs'
