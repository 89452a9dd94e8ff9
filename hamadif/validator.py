#!/usr/bin/python3
# Copyright (C) 2021 Dr. Ralf Schlatterbeck Open Source Consulting.
# Reichergasse 131, A-3411 Weidling.
# Web: http://www.runtux.com Email: office@runtux.com
# ****************************************************************************
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are
# met:
#
# 1. Redistributions of source code must retain the above copyright
#    notice, this list of conditions and the following disclaimer.
#
# 2. Redistributions in binary form must reproduce the above copyright
#    notice, this list of conditions and the following disclaimer in the
#    documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS
# IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED
# TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A
# PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT
# HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL,
# SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED
# TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR
# PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS
# SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
# ****************************************************************************

""" Pattern table for the ADIF data types.
    The decoders never consult this table, they hand out the raw
    strings. Checking them against the data type indicator is left to
    whoever consumes the decoded document.
"""

from re import compile as rc

# ADIF 'Character's except comma, colon, angle brackets, curly brackets.
# Space is allowed inside a name but not at its start or end.
_name_chars = r'\x21-\x2B\x2D-\x39\x3B\x3D\x3F-\x7A\x7C\x7E'
field_name  = r'[%s](?:[\x20%s]*[%s])?' % ((_name_chars,) * 3)
data_length = r'[0-9]+'
data_type   = r'[A-Za-z]'
tag         = r'<(%s)(?::(%s)(?::(%s))?)?>' \
            % (field_name, data_length, data_type)

number      = r'-?[0-9]*\.?[0-9]+'
character   = r'[\x20-\x7E]'
intl_char   = r'[^\n\r]'
grid        = r'[A-Ra-r]{2}(?:[0-9]{2}(?:[A-Xa-x]{2}(?:[0-9]{2})?)?)?'
pota_ref    = r'[A-Za-z]{1,4}-[0-9]{4,5}(?:@[A-Za-z]{2}-[A-Za-z0-9]{1,3})?'

# Declaration of user-defined fields in the header: FieldName,{...}
userdef_range = r'\{(%s):(%s)\}' % (number, number)
userdef_enum  = r'\{(%s+)\}' % character

data_types = dict \
    ( award_list                 = r'.*'
    , credit_list                = r'.*'
    , sponsored_award_list       = r'.*'
    , boolean                    = r'[YyNn]'
    , digit                      = r'[0-9]'
    , integer                    = r'-?[0-9]+'
    , number                     = number
    , positive_integer           = r'[0-9]+'
    , character                  = character
    , intl_character             = intl_char
    , date                       = r'(?:19[3-9][0-9]|[2-9][0-9]{3})'
                                   r'(?:0[1-9]|1[0-2])(?:[0-2][0-9]|3[0-1])'
    , time                       = r'(?:[0-1][0-9]|2[0-3])(?:[0-5][0-9]){1,2}'
    , iota_ref_no                = r'(?i:NA|SA|EU|AF|OC|AS|AN)-[0-9]{3}'
    , string                     = character + '+'
    , intl_string                = intl_char + '+'
    , multiline_string           = r'(?:[\x20-\x7E]|\r\n)*'
    , intl_multiline_string      = r'(?s:.*)'
    , enumeration                = r'.*'
    , grid_square                = grid
    , grid_square_ext            = r'[A-Xa-x]{2}(?:[0-9]{2})?'
    , grid_square_list           = r'%s(?:,%s)*' % (grid, grid)
    , location                   = r'[EeWwNnSs](?:0[0-9]{2}|1[0-7][0-9]|180)'
                                   r' [0-5][0-9]\.[0-9]{3}'
    , pota_ref                   = pota_ref
    , pota_ref_list              = r'%s(?:,%s)*' % (pota_ref, pota_ref)
    , secondary_subdivision_list = r'.*'
    , sota_ref                   = r'[A-Za-z0-9]{1,8}/[A-Za-z]{2}-[0-9]{3}'
    , wwff_ref                   = r'[A-Za-z0-9]{1,4}[Ff]{2}-[0-9]{4}'
    )

# Data type indicators of a data specifier or a TYPE attribute
type_indicators = dict \
    ( A = 'award_list'
    , B = 'boolean'
    , D = 'date'
    , E = 'enumeration'
    , G = 'intl_multiline_string'
    , I = 'intl_string'
    , L = 'location'
    , M = 'multiline_string'
    , N = 'number'
    , S = 'string'
    , T = 'time'
    )

matchers = dict ((k, rc (v)) for k, v in data_types.items ())

def is_valid (type_indicator, value) :
    """ Check value against the data type given by a type indicator
        letter or by the name of the type in data_types.
        Type indicators we don't know about are not checked.
    """
    name = type_indicators.get (type_indicator.upper (), type_indicator)
    if name not in matchers :
        return True
    return matchers [name].fullmatch (value) is not None
# end def is_valid
