import os

import pytest

from hamadif.adif  import ADIF, main
from hamadif.error import ADIF_Parse_Error

DATA = os.path.join(os.path.dirname(__file__), 'data')


def sample(name):
    return os.path.join(DATA, name)


def test_round_trip_single_record():
    adif = ADIF.from_adi('<CALL:6>JS2PBF<BAND:2>2M<EOR>')
    assert len(adif) == 1
    assert adif.header.fields == {}
    rec = adif.records[0]
    assert set(rec.fields) == {'CALL', 'BAND'}
    assert rec.get('CALL').data == 'JS2PBF'
    assert rec.get('BAND').data == '2M'
    assert adif.max_record_id == 0


def test_no_header():
    for adif in (
        ADIF.from_adi('<CALL:3>K1A<EOR>'),
        ADIF.from_adx('<ADX><RECORDS><RECORD><CALL>K1A</CALL></RECORD>'
                      '</RECORDS></ADX>'),
    ):
        assert adif.header.fields == {}
        assert adif.header.userdefs == {}
        assert adif.header.appdefs == {}


def test_formats_are_equivalent():
    adi = ADIF.from_file(sample('sample.adi'))
    adx = ADIF.from_file(sample('sample.adx'))
    assert adi.header == adx.header
    assert adi.records == adx.records
    assert adi == adx
    assert [r.id for r in adi] == [r.id for r in adx] == [0, 1]


def test_decode_twice_is_equal():
    with open(sample('sample.adi'), encoding='utf-8', newline='') as f:
        text = f.read()
    assert ADIF.decode(text) == ADIF.decode(text.encode('utf-8'))


def test_guess_format():
    assert ADIF.guess_format('<?xml version="1.0"?><ADX/>') == 'adx'
    assert ADIF.guess_format('\n  <ADX>\n') == 'adx'
    assert ADIF.guess_format(b'\xef\xbb\xbf<ADX>') == 'adx'
    assert ADIF.guess_format('<ADIF_VER:5>3.1.4<EOH>') == 'adi'
    assert ADIF.guess_format('Log of K1A <EOH>') == 'adi'


def test_decode_guesses_format():
    adif = ADIF.decode('<ADX><RECORDS><RECORD><CALL>K1A</CALL></RECORD>'
                       '</RECORDS></ADX>')
    assert adif.records[0].get('CALL').data == 'K1A'


def test_unknown_format():
    with pytest.raises(ADIF_Parse_Error):
        ADIF.decode('<CALL:3>K1A<EOR>', 'cabrillo')


def test_malformed_adx_yields_no_document():
    with pytest.raises(ADIF_Parse_Error):
        ADIF.from_adx('<ADX><RECORDS>')


def test_from_file_with_other_extension(tmp_path):
    path = tmp_path / 'log.txt'
    path.write_bytes(b'<CALL:3>K1A\r\n<NOTES:4>a\r\nb<EOR>\r\n')
    adif = ADIF.from_file(str(path))
    assert adif.records[0].get('NOTES').data == 'a\nb'


LOG = (
    '<CALL:4>dl1a<QSO_DATE:8>20200102<TIME_ON:4>1200<EOR>'
    '<CALL:4>K1AB<QSO_DATE:8>20190101<TIME_ON:6>235959<EOR>'
    '<CALL:4>ab1c<QSO_DATE:8>20200102<TIME_ON:4>0800<EOR>'
    '<CALL:4>W1AW<EOR>'
)


def calls(adif):
    return [r.get('CALL').data for r in adif]


def test_sort_by_datetime():
    adif = ADIF.from_adi(LOG)
    adif.sort_by_datetime()
    assert calls(adif) == ['W1AW', 'K1AB', 'ab1c', 'dl1a']
    adif.sort_by_datetime(reverse=True)
    assert calls(adif) == ['dl1a', 'ab1c', 'K1AB', 'W1AW']


def test_sort_by_call():
    adif = ADIF.from_adi(LOG)
    adif.sort_by_call()
    assert calls(adif) == ['ab1c', 'dl1a', 'K1AB', 'W1AW']


def test_sort_by_id_restores_order():
    adif = ADIF.from_adi(LOG)
    original = list(adif.records)
    adif.sort_by_call(reverse=True)
    adif.sort_by_id()
    assert adif.records == original
    assert [r.id for r in adif] == [0, 1, 2, 3]
    adif.sort_by_id(reverse=True)
    assert [r.id for r in adif] == [3, 2, 1, 0]
    assert adif.max_record_id == 3


def test_main(capsys):
    main([sample('sample.adi'), '--sort', 'call'])
    out = capsys.readouterr().out
    assert 'ADIF_VER: 3.0.5' in out
    assert 'SWEATERSIZE' in out
    assert 'APP_MONOLOG_COMPRESSION' in out
    assert 'Got 2 records' in out
    assert out.index('ON4UN') < out.index('VK9NS')


def test_main_adx(capsys):
    main([sample('sample.adx'), '-f', 'adx'])
    out = capsys.readouterr().out
    assert 'Got 2 records' in out
    assert out.index('VK9NS') < out.index('ON4UN')


def test_from_file_latin1_adx(tmp_path):
    path = tmp_path / 'log.adx'
    path.write_bytes(
        '<?xml version="1.0" encoding="ISO-8859-1"?>'
        '<ADX><RECORDS><RECORD><NAME>Jürgen</NAME></RECORD></RECORDS></ADX>'
        .encode('iso-8859-1')
    )
    adif = ADIF.from_file(str(path), encoding='iso-8859-1')
    assert adif.records[0].get('NAME').data == 'Jürgen'


def test_empty_fields_are_equivalent():
    adi = ADIF.from_adi('<CALL:3>K1A<NOTES:0><EOR>')
    adx = ADIF.from_adx('<ADX><RECORDS><RECORD><CALL>K1A</CALL><NOTES/>'
                        '</RECORD></RECORDS></ADX>')
    assert adi == adx
    assert 'NOTES' not in adx.records[0]
