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

""" Tokenizer for the tagged ADIF format (ADI).
    The document is a sequence of data specifiers
    <FieldName[:Length[:Type]]> each followed by Length bytes of data,
    any text between data specifiers is a comment. The length counts
    bytes of the UTF-8 encoded document, not characters.
"""

import codecs
import logging
from collections      import namedtuple
from enum             import Enum
from re               import compile as rc
from rsclib.autosuper import autosuper
from hamadif.error    import ADIF_Configuration_Error, ADIF_Parse_Error
from hamadif          import validator

log = logging.getLogger (__name__)

class Event_Type (Enum) :
    COMMENT      = 'comment'
    START_FIELD  = 'start_field'
    FOUND_DATA   = 'found_data'
    END_FIELD    = 'end_field'
    END_DOCUMENT = 'end_document'
# end class Event_Type

class ADI_Event \
    (namedtuple ('ADI_Event', 'kind name length type data lineno')) :
    """ Parse event, per data specifier the sequence is
        COMMENT?, START_FIELD, FOUND_DATA?, END_FIELD
        followed by a single END_DOCUMENT at the end.
    """
    __slots__ = ()

    def __new__ \
        ( cls, kind
        , name   = None
        , length = None
        , type   = None
        , data   = None
        , lineno = None
        ) :
        return super (ADI_Event, cls).__new__ \
            (cls, kind, name, length, type, data, lineno)
    # end def __new__

# end class ADI_Event

class ADI_Sink (autosuper) :
    """ Receives the events of an ADI_Tokenizer, one method per event
        type. The default methods ignore the event.
    """

    def dispatch (self, event) :
        getattr (self, event.kind.value) (event)
    # end def dispatch

    def comment (self, event) :
        pass
    # end def comment

    def start_field (self, event) :
        pass
    # end def start_field

    def found_data (self, event) :
        pass
    # end def found_data

    def end_field (self, event) :
        pass
    # end def end_field

    def end_document (self, event) :
        pass
    # end def end_document

# end class ADI_Sink

class ADI_Tokenizer (autosuper) :

    tag_re     = rc (validator.tag.encode ('ascii'))
    newline_re = rc (b'\r\n|\r|\n')

    def __init__ (self, text, sink = None) :
        self.__super.__init__ ()
        self.text   = text
        self.sink   = sink
        self.lineno = 0
    # end def __init__

    def encoded (self) :
        """ The document as UTF-8 encoded bytes without byte order mark.
            Bytes input must be valid UTF-8.
        """
        try :
            if isinstance (self.text, str) :
                buf = self.text.encode ('utf-8')
            else :
                buf = bytes (self.text)
                buf.decode ('utf-8')
        except UnicodeError as err :
            raise ADIF_Parse_Error ("Invalid UTF-8 in ADI document") from err
        if buf.startswith (codecs.BOM_UTF8) :
            buf = buf [len (codecs.BOM_UTF8):]
        return buf
    # end def encoded

    def count_lines (self, buf) :
        return len (self.newline_re.findall (buf))
    # end def count_lines

    def events (self) :
        """ Generator of ADI_Event, the document is scanned only once.
            Text after the last data specifier is ignored.
        """
        buf         = self.encoded ()
        pos         = 0
        self.lineno = 1
        while True :
            m = self.tag_re.search (buf, pos)
            if not m :
                break
            text = buf [pos:m.start ()].decode ('utf-8', 'replace')
            if text.strip () :
                yield ADI_Event \
                    (Event_Type.COMMENT, data = text, lineno = self.lineno)
            self.lineno += self.count_lines (buf [pos:m.end ()])
            name, length, type = m.groups ()
            name = name.decode ('ascii')
            if length is not None :
                length = int (length)
            if type is not None :
                type = type.decode ('ascii')
            yield ADI_Event \
                ( Event_Type.START_FIELD
                , name   = name
                , length = length
                , type   = type
                , lineno = self.lineno
                )
            pos = m.end ()
            if length :
                data = buf [pos:pos + length]
                pos += length
                self.lineno += self.count_lines (data)
                yield ADI_Event \
                    ( Event_Type.FOUND_DATA
                    , name   = name
                    , data   = data.decode ('utf-8', 'replace')
                    , lineno = self.lineno
                    )
            yield ADI_Event (Event_Type.END_FIELD, name, lineno = self.lineno)
        if pos < len (buf) and buf [pos:].strip () :
            log.debug \
                ("Ignoring trailing text after line %s", self.lineno)
        yield ADI_Event (Event_Type.END_DOCUMENT, lineno = self.lineno)
    # end def events

    def parse (self) :
        """ Push all events to the sink """
        if self.sink is None :
            raise ADIF_Configuration_Error ("No event sink for ADI_Tokenizer")
        for event in self.events () :
            self.sink.dispatch (event)
    # end def parse

# end class ADI_Tokenizer
