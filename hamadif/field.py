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

from rsclib.autosuper import autosuper
from hamadif.error    import ADIF_Logic_Error
from hamadif          import validator
from re               import compile as rc

class Field (autosuper) :
    """ A single ADIF field: the field name (uppercase, for
        application- and user-defined fields this is 'APP' and
        'USERDEF' respectively, i.e. the ADX element name), an optional
        data value and optional attributes like TYPE, FIELDNAME,
        PROGRAMID, FIELDID, ENUM, RANGE.
    """

    kind = 'field'

    # Attributes whose values are uppercased, too
    upper_values = ('TYPE', 'ENUM')

    def __init__ (self, name, data = None, attributes = None) :
        self.__super.__init__ ()
        self.name       = name.upper ()
        self.data       = data
        self.attributes = {}
        for k, v in (attributes or {}).items () :
            self.set_attribute (k, v)
    # end def __init__

    @property
    def display_name (self) :
        """ The name under which the field is stored in a record.
            This is the field name as seen in an ADI data specifier:
            APP_<PROGRAMID>_<FIELDNAME> for application-defined fields,
            the FIELDNAME (or the data of a declaration) for
            user-defined fields.
        """
        if self.name == 'APP' :
            pid = self.get_attribute ('PROGRAMID')
            fn  = self.get_attribute ('FIELDNAME')
            if pid is None or fn is None :
                raise ADIF_Logic_Error \
                    ("APP field needs PROGRAMID and FIELDNAME: %r" % self)
            return '_'.join ((self.name, pid, fn)).upper ()
        if self.name == 'USERDEF' :
            fn = self.get_attribute ('FIELDNAME')
            if fn is not None :
                return fn.upper ()
            if self.data is None :
                raise ADIF_Logic_Error \
                    ("USERDEF field needs FIELDNAME or data: %r" % self)
            return self.data.upper ()
        return self.name
    # end def display_name

    @property
    def type (self) :
        return self.get_attribute ('TYPE')
    # end def type

    def append_data (self, data) :
        if self.data is None :
            self.data = data
        else :
            self.data += data
    # end def append_data

    def get_attribute (self, key, default = None) :
        return self.attributes.get (key.upper (), default)
    # end def get_attribute

    def set_attribute (self, key, value) :
        key = key.upper ()
        if key in self.upper_values :
            value = value.upper ()
        self.attributes [key] = value
    # end def set_attribute

    def __eq__ (self, other) :
        if not isinstance (other, Field) :
            return NotImplemented
        return \
            (   self.kind       == other.kind
            and self.name       == other.name
            and self.data       == other.data
            and self.attributes == other.attributes
            )
    # end def __eq__

    __hash__ = None

    def __repr__ (self) :
        a = ''.join \
            ( ' %s=%r' % (k, self.attributes [k])
              for k in sorted (self.attributes)
            )
        return '<%s %s%s: %r>' \
            % (self.__class__.__name__, self.name, a, self.data)
    # end def __repr__

# end class Field

class Field_Declaration (Field) :
    """ Describes a dynamically declared field instead of carrying a
        QSO value. Distinguished by kind, 'appdef' or 'userdef'.
    """

    @property
    def field_name (self) :
        return self.get_attribute ('FIELDNAME')
    # end def field_name

# end class Field_Declaration

class App_Def (Field_Declaration) :
    """ Declaration of an application-defined field, the first
        occurrence of APP_<PROGRAMID>_<FIELDNAME> seen in a document.
    """

    kind = 'appdef'

    def __init__ (self, program_id, field_name, type = None) :
        self.__super.__init__ ('APP')
        self.set_attribute ('PROGRAMID', program_id)
        self.set_attribute ('FIELDNAME', field_name)
        if type :
            self.set_attribute ('TYPE', type)
    # end def __init__

    @classmethod
    def from_field (cls, field) :
        """ Declaration for an APP field, the value is not kept """
        return cls \
            ( field.get_attribute ('PROGRAMID')
            , field.get_attribute ('FIELDNAME')
            , field.type
            )
    # end def from_field

    @property
    def program_id (self) :
        return self.get_attribute ('PROGRAMID')
    # end def program_id

# end class App_Def

class User_Def (Field_Declaration) :
    """ Declaration of a user-defined field in the header.
        The declared field name is the data of the declaration (as in
        ADX where it is the content of the USERDEF element), FIELDID
        is the number of the declaration. At most one of enum or range
        may be given, e.g. enum '{S,M,L}' or range '{5:20}'.
    """

    kind     = 'userdef'
    range_re = rc (validator.userdef_range)

    def __init__ \
        ( self
        , field_id   = None
        , field_name = None
        , type       = None
        , enum       = None
        , range      = None
        ) :
        if enum is not None and range is not None :
            raise ADIF_Logic_Error \
                ("USERDEF %s: Only one of ENUM and RANGE allowed" % field_name)
        self.__super.__init__ ('USERDEF', field_name)
        if field_id is not None :
            self.set_attribute ('FIELDID', field_id)
        if type :
            self.set_attribute ('TYPE', type)
        if enum is not None :
            self.set_attribute ('ENUM', enum)
        if range is not None :
            self.set_attribute ('RANGE', range)
    # end def __init__

    @property
    def field_name (self) :
        return self.data
    # end def field_name

    @property
    def field_id (self) :
        return self.get_attribute ('FIELDID')
    # end def field_id

    @property
    def enum (self) :
        return self.get_attribute ('ENUM')
    # end def enum

    @property
    def range (self) :
        return self.get_attribute ('RANGE')
    # end def range

    @property
    def bounds (self) :
        """ Lower and upper bound of a range declaration as floats """
        if self.range is None :
            return None
        m = self.range_re.fullmatch (self.range)
        if not m :
            return None
        return float (m.group (1)), float (m.group (2))
    # end def bounds

# end class User_Def
