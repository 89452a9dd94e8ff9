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

""" Decoders for the two ADIF formats, ADI (tagged text) and ADX (XML).
    Both produce header fields, declarations of user-defined and
    application-defined fields and the list of records.
"""

import logging
from re                import compile as rc, IGNORECASE
from lxml              import etree
from rsclib.autosuper  import autosuper
from hamadif.error     import ADIF_Parse_Error
from hamadif.field     import Field, App_Def, User_Def
from hamadif.record    import Header, Record
from hamadif.tokenizer import ADI_Sink, ADI_Tokenizer
from hamadif           import validator

log = logging.getLogger (__name__)

class Decoder (autosuper) :
    """ Common state of both decoders, a decoder is used for decoding a
        single document.
    """

    def __init__ (self, text) :
        self.__super.__init__ ()
        self.text = text
        self.reset ()
    # end def __init__

    @property
    def header (self) :
        return Header (self.header_fields, self.userdefs, self.appdefs)
    # end def header

    def add_appdef (self, field) :
        """ The first occurrence of an application-defined field declares it
        """
        name = field.display_name
        if name not in self.appdefs :
            log.debug ("Application-defined field %s", name)
            self.appdefs [name] = App_Def.from_field (field)
    # end def add_appdef

    def add_userdef (self, field) :
        if field.data is None :
            log.debug ("Ignoring USERDEF%s without name", field.field_id)
            return
        log.debug ("User-defined field %s", field.display_name)
        self.userdefs [field.display_name] = field
    # end def add_userdef

    def close_header (self) :
        """ The fields seen so far are header fields, the record id
            is not advanced.
        """
        self.header_fields = dict (self.record.fields)
        self.record        = Record (self.record.id)
    # end def close_header

    def close_record (self) :
        self.records.append (self.record.close ())
        self.record = self.record.new_record ()
    # end def close_record

    def finish (self) :
        if len (self.record) :
            log.info \
                ( "Dropping unterminated record %s with fields %s"
                , self.record.id, ', '.join (self.record)
                )
        log.debug ("Decoded %s records", len (self.records))
    # end def finish

    def reset (self) :
        self.header_fields = {}
        self.userdefs      = {}
        self.appdefs       = {}
        self.records       = []
        self.record        = Record (0)
        self.field         = None
    # end def reset

# end class Decoder

class ADI_Decoder (Decoder, ADI_Sink) :
    """ Decode the tagged ADIF format.
        Field names are case-insensitive, the data keeps its case.
    """

    userdef_re = rc (r'USERDEF([0-9]+)', IGNORECASE)
    appdef_re  = rc \
        ( r'APP_(%s)_(%s)' % (validator.field_name, validator.field_name)
        , IGNORECASE
        )
    range_re   = rc (validator.userdef_range)
    enum_re    = rc (validator.userdef_enum)

    def __init__ (self, text) :
        self.__super.__init__ (text)
        self.parser = ADI_Tokenizer (text)
    # end def __init__

    def decode (self) :
        log.debug ("Decoding ADI document")
        self.reset ()
        self.parser.sink = self
        self.parser.parse ()
    # end def decode

    def comment (self, event) :
        log.debug ("%s: Comment: %r", event.lineno, event.data)
    # end def comment

    def start_field (self, event) :
        name = event.name
        m    = self.userdef_re.fullmatch (name)
        if m :
            self.field = User_Def (field_id = m.group (1), type = event.type)
            return
        m = self.appdef_re.fullmatch (name)
        if m :
            attrs      = dict (PROGRAMID = m.group (1), FIELDNAME = m.group (2))
            self.field = Field ('APP', attributes = attrs)
            if event.type :
                self.field.set_attribute ('TYPE', event.type)
            self.add_appdef (self.field)
            return
        if name.upper () in self.userdefs :
            userdef    = self.userdefs [name.upper ()]
            self.field = Field ('USERDEF', attributes = dict (FIELDNAME = name))
            type       = event.type or userdef.type
            if type :
                self.field.set_attribute ('TYPE', type)
            return
        self.field = Field (name)
        if event.type :
            self.field.set_attribute ('TYPE', event.type)
    # end def start_field

    def found_data (self, event) :
        data = event.data.replace ('\r\n', '\n')
        if self.field.kind == 'userdef' :
            self.set_userdef (data)
        elif self.field.name not in ('EOH', 'EOR') :
            self.field.data = data
            self.record.set (self.field)
    # end def found_data

    def end_field (self, event) :
        if self.field.kind == 'userdef' :
            self.add_userdef (self.field)
        elif self.field.name == 'EOH' :
            self.close_header ()
        elif self.field.name == 'EOR' :
            self.close_record ()
        self.field = None
    # end def end_field

    def end_document (self, event) :
        self.finish ()
    # end def end_document

    def set_userdef (self, data) :
        """ Data of a declaration is FieldName or FieldName,{...} where
            the part in braces is either a range or an enumeration.
        """
        name, sep, rest = data.partition (',')
        rest = rest.strip ()
        if sep and self.range_re.fullmatch (rest) :
            self.field.data = name.strip ()
            self.field.set_attribute ('RANGE', rest)
        elif sep and self.enum_re.fullmatch (rest) :
            self.field.data = name.strip ()
            self.field.set_attribute ('ENUM', rest)
        else :
            self.field.data = data
    # end def set_userdef

# end class ADI_Decoder

class ADX_Decoder (Decoder) :
    """ Decode the XML ADIF format.
        This is the target of an lxml parser, the character data of an
        element may arrive in several pieces. The stack of open
        elements tells a USERDEF declaration in the HEADER from a
        USERDEF field in a RECORD.
    """

    structural = ('ADX', 'HEADER', 'RECORDS', 'RECORD')

    def decode (self) :
        log.debug ("Decoding ADX document")
        self.reset ()
        text     = self.text
        encoding = None
        # Already decoded, an encoding declaration must not apply again
        if isinstance (text, str) :
            text     = text.encode ('utf-8')
            encoding = 'utf-8'
        parser = etree.XMLParser \
            ( target           = self
            , encoding         = encoding
            , resolve_entities = False
            , no_network       = True
            )
        try :
            etree.fromstring (text, parser)
        except etree.XMLSyntaxError as err :
            raise ADIF_Parse_Error ("Invalid ADX document: %s" % err) from err
    # end def decode

    def reset (self) :
        self.__super.reset ()
        self.namespace = []
    # end def reset

    def start (self, tag, attrib) :
        name = etree.QName (tag).localname.upper ()
        self.namespace.append (name)
        if name in self.structural :
            return
        attrs = dict ((k.upper (), v) for k, v in attrib.items ())
        if name == 'APP' :
            self.field = Field ('APP', attributes = attrs)
            self.add_appdef (self.field)
        elif name == 'USERDEF' and 'HEADER' in self.namespace :
            range = attrs.get ('RANGE')
            self.field = User_Def \
                ( field_id = attrs.get ('FIELDID')
                , type     = attrs.get ('TYPE')
                , enum     = attrs.get ('ENUM') if range is None else None
                , range    = range
                )
        elif name == 'USERDEF' :
            self.field = Field ('USERDEF', attributes = attrs)
            fieldname  = attrs.get ('FIELDNAME', '')
            userdef    = self.userdefs.get (fieldname.upper ())
            if self.field.type is None and userdef and userdef.type :
                self.field.set_attribute ('TYPE', userdef.type)
        else :
            self.field = Field (name, attributes = attrs)
    # end def start

    def data (self, data) :
        if self.field is None or self.namespace [-1] in self.structural :
            return
        self.field.append_data (data.replace ('\r\n', '\n'))
    # end def data

    def end (self, tag) :
        name = self.namespace.pop ()
        if name == 'HEADER' :
            self.close_header ()
        elif name == 'RECORD' :
            self.close_record ()
        elif name in self.structural or self.field is None :
            pass
        elif self.field.data is None :
            log.debug ("Ignoring empty field %s", name)
        elif self.field.kind == 'userdef' :
            self.add_userdef (self.field)
        else :
            self.record.set (self.field)
        if name not in self.structural :
            self.field = None
    # end def end

    def comment (self, text) :
        log.debug ("Comment: %r", text)
    # end def comment

    def close (self) :
        self.finish ()
        return self
    # end def close

# end class ADX_Decoder
