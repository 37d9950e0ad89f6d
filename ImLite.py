
from PIL import Image as PIM
import numpy as np

import matplotlib.pyplot as plt

def aget_ipython():
    try:
        import IPython
        return IPython;
    except ImportError:
        return None;

def runningInNotebook():
    ipyth = aget_ipython();
    if(ipyth is None):
        return False;
    shell = ipyth.get_ipython().__class__.__name__;
    if shell == 'ZMQInteractiveShell':
        return True   # Jupyter notebook or qtconsole
    else:
        return False  # Terminal IPython or plain interpreter


_ISNOTEBOOK = False;
if(runningInNotebook()):
    _ISNOTEBOOK = True;

def is_notebook():
    return _ISNOTEBOOK;

class Image(object):
    """RGBA framebuffer: an (height, width, 4) array of 8-bit channels.
    """

    def __init__(self, path=None, pixels=None, **kwargs):
        # You can do Image(pixels) or Image(path)
        self._samples = None;
        self.file_path = None;
        if (isinstance(path, np.ndarray) and (pixels is None)):
            # if the path looks like pixels and pixels are undefined, treat the path as pixels
            self.pixels = path;
        else:
            self.pixels = pixels;
            self.file_path = path;
            if(self.file_path is not None and pixels is None):
                self.loadImageData(self.file_path);

    @property
    def pixels(self):
        return self._samples;

    @pixels.setter
    def pixels(self, data):
        self._samples = data;

    @property
    def shape(self):
        return np.asarray(self.pixels.shape)[:];

    @property
    def width(self):
        return int(self.shape[1]);

    @property
    def height(self):
        return int(self.shape[0]);

    def loadImageData(self, path=None):
        if (path):
            self.file_path = path;
        if (self.file_path):
            pim = PIM.open(fp=self.file_path).convert('RGBA');
            self._samples = np.array(pim, dtype=np.uint8);

    @staticmethod
    def SolidRGBAPixels(shape, color=None):
        if (color is None):
            color = [0, 0, 0, 0];
        rblock = np.ones((shape[0], shape[1], 4), dtype=np.uint8);
        rblock[:] = color;
        return rblock;

    @classmethod
    def Blank(cls, width, height, background=None):
        """Framebuffer of the given size filled with background (transparent black by default)."""
        if (width <= 0 or height <= 0):
            raise ValueError("image width and height must be positive, got {}x{}".format(width, height));
        return cls(pixels=cls.SolidRGBAPixels((height, width), background));

    def PIL(self):
        return PIM.fromarray(np.uint8(self.pixels));

    def tobytes(self):
        """Raw row-major r,g,b,a bytes, the layout of a canvas ImageData buffer."""
        return self.pixels.tobytes();

    def writeToFile(self, output_path=None, **kwargs):
        self.PIL().save(output_path, **kwargs);

    def show(self, title=None, new_figure=True, **kwargs):
        if (is_notebook()):
            Image.Show(self, new_figure=new_figure, title=title, **kwargs);
        else:
            self.PIL().show(title=title);

    @staticmethod
    def Show(im, title=None, new_figure=True, axis=None, **kwargs):
        if (isinstance(im, Image)):
            imdata = im.pixels;
        else:
            imdata = im;

        if (new_figure):
            if (title is not None):
                plt.figure(num=title);
            else:
                plt.figure();
        if (axis is not None):
            axis.imshow(imdata, **kwargs);
        else:
            plt.imshow(imdata, **kwargs);
        plt.axis('off');
        if (title):
            plt.title(title);


def draw_pixel(image, x, y, color):
    """Write an (r, g, b, a) color into the framebuffer at column x, row y."""
    image.pixels[y, x] = color;
