#!/usr/bin/python
# Copyright (C) 2019-21 Dr. Ralf Schlatterbeck Open Source Consulting.
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

import io
import os
import sys
import logging
from argparse          import ArgumentParser
from re                import compile as rc, IGNORECASE
from rsclib.autosuper  import autosuper
from hamadif.decoder   import ADI_Decoder, ADX_Decoder
from hamadif.error     import ADIF_Parse_Error
from hamadif.record    import Header

log = logging.getLogger (__name__)

class ADIF (autosuper) :
    """ An ADIF document: the header and the list of QSO records.
        Decoded from either ADI or ADX.
    """

    decoders   = dict (adi = ADI_Decoder, adx = ADX_Decoder)
    extensions = {'.adi' : 'adi', '.adif' : 'adi', '.adx' : 'adx'}
    adx_re     = rc (r'\s*(?:<\?xml|<ADX[\s>])', IGNORECASE)

    def __init__ (self, header = None, records = None) :
        self.__super.__init__ ()
        self.header        = header
        self.records       = list (records or [])
        self.max_record_id = None
        if header is None :
            self.header = Header ()
        if self.records :
            self.max_record_id = max (r.id for r in self.records)
    # end def __init__

    @classmethod
    def decode (cls, text, format = None) :
        """ Decode text (str or UTF-8 encoded bytes), format is 'adi',
            'adx' or None for guessing it from the start of the text.
        """
        if format is None :
            format = cls.guess_format (text)
        decoder = cls.decoders.get (format.lower ())
        if decoder is None :
            raise ADIF_Parse_Error ("Unknown ADIF format: %s" % format)
        decoder = decoder (text)
        decoder.decode ()
        return cls (decoder.header, decoder.records)
    # end def decode

    @classmethod
    def from_adi (cls, text) :
        return cls.decode (text, 'adi')
    # end def from_adi

    @classmethod
    def from_adx (cls, text) :
        return cls.decode (text, 'adx')
    # end def from_adx

    @classmethod
    def from_file (cls, path, format = None, encoding = 'utf-8') :
        """ Read and decode a file, the format is taken from the file
            extension if not given. Line ends are kept as they are:
            the data lengths in ADI count them.
        """
        if format is None :
            ext    = os.path.splitext (path) [1].lower ()
            format = cls.extensions.get (ext)
        with io.open (path, 'r', encoding = encoding, newline = '') as f :
            text = f.read ()
        return cls.decode (text, format)
    # end def from_file

    @classmethod
    def guess_format (cls, text) :
        if isinstance (text, bytes) :
            text = text [:256].decode ('utf-8', 'replace')
        if cls.adx_re.match (text.lstrip ('\ufeff')) :
            return 'adx'
        return 'adi'
    # end def guess_format

    def sort_by_id (self, reverse = False) :
        """ Restore document order (or reverse it) """
        self.records.sort (key = lambda r: r.id, reverse = reverse)
    # end def sort_by_id

    def sort_by_datetime (self, reverse = False) :
        """ Sort by QSO_DATE and TIME_ON, records without them go first.
        """
        def key (r) :
            d = r.get ('QSO_DATE')
            t = r.get ('TIME_ON')
            return \
                ( (d.data if d and d.data else '00000000')
                + (t.data if t and t.data else '000000')
                )
        self.records.sort (key = key, reverse = reverse)
    # end def sort_by_datetime

    def sort_by_call (self, reverse = False) :
        def key (r) :
            c = r.get ('CALL')
            return (c.data or '').upper () if c else ''
        self.records.sort (key = key, reverse = reverse)
    # end def sort_by_call

    def __eq__ (self, other) :
        if not isinstance (other, ADIF) :
            return NotImplemented
        return self.header == other.header and self.records == other.records
    # end def __eq__

    __hash__ = None

    def __iter__ (self) :
        for r in self.records :
            yield r
    # end def __iter__

    def __len__ (self) :
        return len (self.records)
    # end def __len__

# end class ADIF

def format_field (field) :
    r = [field.display_name]
    if field.attributes :
        r.append \
            ( '[%s]'
            % ', '.join
                ('%s=%s' % (k, field.attributes [k])
                 for k in sorted (field.attributes)
                )
            )
    if field.data is not None :
        r.append (repr (field.data))
    return ' '.join (r)
# end def format_field

def main (argv = None) :
    cmd = ArgumentParser ()
    cmd.add_argument \
        ( "adif"
        , help    = "ADIF file to read, default is standard input"
        , nargs   = '?'
        )
    cmd.add_argument \
        ( "-D", "--debug"
        , help    = "Log debug messages"
        , action  = 'store_true'
        )
    cmd.add_argument \
        ( "-e", "--encoding"
        , help    = "Encoding of ADIF file, default=%(default)s"
        , default = 'utf-8'
        )
    cmd.add_argument \
        ( "-f", "--format"
        , help    = "Format of ADIF file, default is to guess it"
        , choices = ('adi', 'adx')
        )
    cmd.add_argument \
        ( "-r", "--reverse"
        , help    = "Reverse sort order"
        , action  = 'store_true'
        )
    cmd.add_argument \
        ( "-s", "--sort"
        , help    = "Sort records by id, datetime or call, default=%(default)s"
        , choices = ('id', 'datetime', 'call')
        , default = 'id'
        )
    cmd.add_argument \
        ( "-v", "--verbose"
        , help    = "Log informational messages"
        , action  = 'store_true'
        )
    args  = cmd.parse_args (argv)
    level = logging.WARNING
    if args.verbose :
        level = logging.INFO
    if args.debug :
        level = logging.DEBUG
    logging.basicConfig (level = level)
    if args.adif :
        adif = ADIF.from_file (args.adif, args.format, args.encoding)
    else :
        text = io.TextIOWrapper \
            (sys.stdin.buffer, encoding = args.encoding, newline = '').read ()
        adif = ADIF.decode (text, args.format)
    getattr (adif, 'sort_by_' + args.sort) (reverse = args.reverse)
    for k in sorted (adif.header.fields) :
        print ('%18s: %s' % (k, adif.header.fields [k].data))
    for k in sorted (adif.header.userdefs) :
        userdef = adif.header.userdefs [k]
        print ('%18s: %s' % ('USERDEF', format_field (userdef)))
    for k in sorted (adif.header.appdefs) :
        print ('%18s: %s' % ('APP', format_field (adif.header.appdefs [k])))
    print ("Got %s records" % len (adif.records))
    for rec in adif :
        print ('Record %s:' % rec.id)
        for k in sorted (rec.fields) :
            print ('    %s' % format_field (rec.fields [k]))
# end def main

if __name__ == '__main__' :
    main ()
