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

from types            import MappingProxyType
from rsclib.autosuper import autosuper

class Field_Container (autosuper) :
    """ Fields by display name, the last field set for a given display
        name wins.
    """

    def __init__ (self, fields = None) :
        self.__super.__init__ ()
        self.fields = {}
        for f in (fields or ()) :
            self.set (f)
    # end def __init__

    def get (self, display_name) :
        return self.fields.get (display_name.upper ())
    # end def get

    def set (self, field, display_name = None) :
        if display_name is None :
            display_name = field.display_name
        self.fields [display_name.upper ()] = field
    # end def set

    def __getitem__ (self, display_name) :
        return self.fields [display_name.upper ()]
    # end def __getitem__

    def __contains__ (self, display_name) :
        return display_name.upper () in self.fields
    # end def __contains__

    def __iter__ (self) :
        return iter (self.fields)
    # end def __iter__

    def __len__ (self) :
        return len (self.fields)
    # end def __len__

# end class Field_Container

class Record (Field_Container) :
    """ A QSO record. The id is given in document order and is only used
        for getting the original order back after sorting, it does not
        take part in comparisons.
        Once closed the fields of a record can no longer be changed.
    """

    def __init__ (self, id = 0, fields = None) :
        self.__super.__init__ (fields)
        self.id = id
    # end def __init__

    @property
    def closed (self) :
        return isinstance (self.fields, MappingProxyType)
    # end def closed

    def close (self) :
        if not self.closed :
            self.fields = MappingProxyType (self.fields)
        return self
    # end def close

    def new_record (self) :
        return self.__class__ (self.id + 1)
    # end def new_record

    def __eq__ (self, other) :
        if not isinstance (other, Record) :
            return NotImplemented
        return dict (self.fields) == dict (other.fields)
    # end def __eq__

    __hash__ = None

    def __repr__ (self) :
        return '<Record %s: %r>' % (self.id, dict (self.fields))
    # end def __repr__

# end class Record

class Header (Field_Container) :
    """ Header fields (e.g. ADIF_VER, PROGRAMID) and the declarations of
        user-defined and application-defined fields, all by display name.
    """

    def __init__ (self, fields = None, userdefs = None, appdefs = None) :
        self.__super.__init__ ()
        self.fields   = dict (fields   or {})
        self.userdefs = dict (userdefs or {})
        self.appdefs  = dict (appdefs  or {})
    # end def __init__

    def __eq__ (self, other) :
        if not isinstance (other, Header) :
            return NotImplemented
        return \
            (   self.fields   == other.fields
            and self.userdefs == other.userdefs
            and self.appdefs  == other.appdefs
            )
    # end def __eq__

    __hash__ = None

    def __repr__ (self) :
        return '<Header fields=%r userdefs=%r appdefs=%r>' \
            % (self.fields, self.userdefs, self.appdefs)
    # end def __repr__

# end class Header
