import pytest

from hamadif.error  import ADIF_Logic_Error
from hamadif.field  import Field, App_Def, User_Def
from hamadif.record import Header, Record


def test_field_name_is_uppercase():
    field = Field('call', 'dl1ab')
    assert field.name == 'CALL'
    assert field.display_name == 'CALL'
    assert field.data == 'dl1ab'


def test_attribute_normalization():
    field = Field('APP', attributes={'programid': 'monolog', 'type': 'd'})
    field.set_attribute('enum', '{a,b}')
    field.set_attribute('FieldName', 'birthday')
    assert field.attributes == {
        'PROGRAMID': 'monolog',
        'TYPE': 'D',
        'ENUM': '{A,B}',
        'FIELDNAME': 'birthday',
    }
    assert field.get_attribute('type') == 'D'
    assert field.display_name == 'APP_MONOLOG_BIRTHDAY'


def test_app_display_name_needs_attributes():
    field = Field('APP', 'x', {'PROGRAMID': 'monolog'})
    with pytest.raises(ADIF_Logic_Error):
        field.display_name


def test_userdef_display_name():
    assert Field('USERDEF', 'M', {'FIELDNAME': 'SweaterSize'}).display_name \
        == 'SWEATERSIZE'
    assert User_Def('1', 'ShoeSize').display_name == 'SHOESIZE'
    with pytest.raises(ADIF_Logic_Error):
        Field('USERDEF').display_name


def test_append_data():
    field = Field('NOTES')
    field.append_data('a')
    field.append_data('b')
    assert field.data == 'ab'


def test_user_def():
    userdef = User_Def('3', 'ShoeSize', 'n', range='{-5.5:20}')
    assert userdef.kind == 'userdef'
    assert userdef.field_id == '3'
    assert userdef.field_name == 'ShoeSize'
    assert userdef.type == 'N'
    assert userdef.enum is None
    assert userdef.bounds == (-5.5, 20.0)
    assert User_Def('2', 'SweaterSize', enum='{S,M,L}').bounds is None


def test_user_def_enum_and_range():
    with pytest.raises(ADIF_Logic_Error):
        User_Def('1', 'X', enum='{A}', range='{1:2}')


def test_app_def_from_field():
    field = Field('APP', 'off', {
        'PROGRAMID': 'monolog', 'FIELDNAME': 'compression', 'TYPE': 's'
    })
    appdef = App_Def.from_field(field)
    assert appdef.kind == 'appdef'
    assert appdef.data is None
    assert appdef.program_id == 'monolog'
    assert appdef.field_name == 'compression'
    assert appdef.type == 'S'
    assert appdef.display_name == field.display_name
    assert appdef != field


def test_field_equality():
    assert Field('CALL', 'K1A') == Field('call', 'K1A')
    assert Field('CALL', 'K1A') != Field('CALL', 'K1B')
    assert Field('CALL', 'K1A', {'TYPE': 'S'}) != Field('CALL', 'K1A')


def test_record():
    rec = Record(4, [Field('CALL', 'K1A'), Field('BAND', '20M')])
    assert rec.id == 4
    assert 'call' in rec
    assert rec['BAND'].data == '20M'
    assert rec.get('MODE') is None
    assert len(rec) == 2
    assert sorted(rec) == ['BAND', 'CALL']
    assert rec.new_record().id == 5


def test_record_equality_ignores_id():
    assert Record(0, [Field('CALL', 'K1A')]) == Record(7, [Field('CALL', 'K1A')])
    assert Record(0, [Field('CALL', 'K1A')]) != Record(0, [Field('CALL', 'K2B')])
    closed = Record(0, [Field('CALL', 'K1A')]).close()
    assert closed == Record(1, [Field('CALL', 'K1A')])


def test_record_close():
    rec = Record(0, [Field('CALL', 'K1A')])
    assert not rec.closed
    rec.close()
    assert rec.closed
    with pytest.raises(TypeError):
        rec.set(Field('BAND', '20M'))


def test_header():
    header = Header()
    assert header.fields == {}
    assert header.userdefs == {}
    assert header.appdefs == {}
    userdef = User_Def('1', 'EPC', 'N')
    other = Header({'ADIF_VER': Field('ADIF_VER', '3.1.4')}, {'EPC': userdef})
    assert other.get('adif_ver').data == '3.1.4'
    assert other != header
    assert other == Header(
        {'ADIF_VER': Field('ADIF_VER', '3.1.4')},
        {'EPC': User_Def('1', 'EPC', 'N')}
    )
